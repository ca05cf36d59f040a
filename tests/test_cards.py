def test_cards_ordered_by_pokedex_number(client, cards):
    res = client.get("/api/cards")
    assert res.status_code == 200
    body = res.json()
    assert len(body) == len(cards)
    numbers = [card["pokedexNumber"] for card in body]
    assert numbers == sorted(numbers)
    first = body[0]
    assert first["name"] == "Bulbasaur"
    assert first["type"] == "Grass"
    assert first["hp"] == 45
    assert first["attack"] == 49
    assert first["imgUrl"] is None


def test_cards_empty_catalog(client):
    res = client.get("/api/cards")
    assert res.status_code == 200
    assert res.json() == []


def test_decks_root_lists_cards_without_auth(client, cards):
    res = client.get("/api/decks")
    assert res.status_code == 200
    assert [card["pokedexNumber"] for card in res.json()] == sorted(c[4] for c in cards)


def test_welcome_and_health(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "TCG" in res.text

    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
