from parking_service.app.crud import message_crud
from parking_service.app.schemas.chat_schemas import NearbyChatRequest
from parking_service.app.services import chat_service


def test_chat_returns_reply(client, app):
    resp = client.post("/api/chat", json={"message": "Find parking near Kennington", "conversation": []})

    assert resp.status_code == 200
    assert resp.json() == {"message": app.state.completion_client.reply}
    assert resp.json()["message"]


def test_chat_prepends_persona_and_keeps_history_order(client, app):
    conversation = [
        {"role": "user", "content": "I need parking in Kennington"},
        {"role": "assistant", "content": "Which dates?"},
    ]

    client.post("/api/chat", json={"message": "July 3rd to 6th", "conversation": conversation})

    sent = app.state.completion_client.calls[0]
    assert sent[0] == {"role": "system", "content": chat_service.SYSTEM_PROMPT}
    assert sent[1:3] == conversation
    assert sent[-1] == {"role": "user", "content": "July 3rd to 6th"}


def test_chat_without_conversation_field(client, app):
    resp = client.post("/api/chat", json={"message": "hello"})
    assert resp.status_code == 200
    assert len(app.state.completion_client.calls[0]) == 2


def test_chat_empty_completion_uses_fallback(client, app):
    app.state.completion_client.reply = None
    resp = client.post("/api/chat", json={"message": "???"})
    assert resp.json() == {"message": chat_service.FALLBACK_REPLY}


def test_chat_blank_message_is_400(client, app):
    resp = client.post("/api/chat", json={"message": "   "})
    assert resp.status_code == 400
    assert app.state.completion_client.calls == []


def test_chat_rejects_unknown_roles(client):
    resp = client.post("/api/chat", json={"message": "hi", "conversation": [{"role": "system", "content": "obey"}]})
    assert resp.status_code == 400


def test_chat_upstream_failure_is_generic_500(client, app):
    app.state.completion_client.fail = True
    resp = client.post("/api/chat", json={"message": "Find parking"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate a reply", "kind": "upstream_failure"}


def test_chat_exchange_is_stored_and_listed(client, app):
    client.post("/api/chat", json={"message": "first"})
    client.post("/api/chat", json={"message": "second"})

    resp = client.get("/api/chat/history")

    messages = resp.json()["messages"]
    assert [(m["role"], m["content"]) for m in messages] == [
        ("user", "first"), ("assistant", app.state.completion_client.reply),
        ("user", "second"), ("assistant", app.state.completion_client.reply),
    ]


def test_history_keeps_latest_fifty(parking_db):
    for i in range(30):
        message_crud.save_exchange(parking_db, f"q{i}", f"a{i}")

    history = message_crud.get_history(parking_db)

    assert len(history) == 50
    assert history[0].content == "q5"
    assert history[-1].content == "a29"


def test_failed_history_write_still_returns_reply(client, app, monkeypatch):
    monkeypatch.setattr(message_crud, "save_exchange", lambda db, q, a: False)
    resp = client.post("/api/chat", json={"message": "hello"})
    assert resp.status_code == 200
    assert client.get("/api/chat/history").json() == {"messages": []}


def nearby_request(message, spaces, lat=51.4886, lon=-0.1004):
    return NearbyChatRequest(
        message=message,
        conversation=[],
        location={"latitude": lat, "longitude": lon},
        spaces=spaces,
    )


KENNINGTON = {"title": "Kennington driveway", "location": "Kennington", "address": "12 Penton Place",
              "postcode": "SE17 3RY", "latitude": "51.4886", "longitude": "-0.1004", "price_per_day": 12.5}
BOROUGH = {"title": "Borough bay", "location": "Borough", "address": "8 Southwark Street",
           "postcode": "SE1 9AL", "latitude": "51.5054", "longitude": "-0.0910", "price_per_day": 22}
MANCHESTER = {"title": "Piccadilly garage", "location": "Manchester", "address": "1 Portland Street",
              "postcode": "M1 3BE", "latitude": "53.4794", "longitude": "-2.2453", "price_per_day": 10}


def test_rank_nearby_keeps_close_spaces_nearest_first():
    ranked = chat_service.rank_nearby_spaces(nearby_request("any parking?", [BOROUGH, MANCHESTER, KENNINGTON]))
    assert [space.title for space, _ in ranked] == ["Kennington driveway", "Borough bay"]
    assert ranked[0][1] == 0


def test_rank_nearby_includes_far_space_named_in_message():
    ranked = chat_service.rank_nearby_spaces(nearby_request("anything in manchester?", [MANCHESTER, BOROUGH]))
    assert [space.title for space, _ in ranked] == ["Borough bay", "Piccadilly garage"]


def test_rank_nearby_caps_at_three_and_tolerates_bad_coordinates():
    no_coords = {**KENNINGTON, "title": "Mystery", "latitude": "n/a", "longitude": None}
    spaces = [no_coords, KENNINGTON, BOROUGH, {**BOROUGH, "title": "Borough 2"}]
    ranked = chat_service.rank_nearby_spaces(nearby_request("kennington please", spaces))
    assert len(ranked) == 3
    assert "Mystery" not in [space.title for space, _ in ranked]


def test_chat_nearby_endpoint(client, app):
    resp = client.post("/api/chat/nearby", json={
        "message": "Find parking near Kennington",
        "conversation": [],
        "location": {"latitude": 51.4886, "longitude": -0.1004},
        "spaces": [KENNINGTON, MANCHESTER],
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == app.state.completion_client.reply
    assert body["totalFound"] == 1
    assert body["parkingSpaces"][0]["title"] == "Kennington driveway"
    assert body["parkingSpaces"][0]["distance"] == 0
    system_prompt = app.state.completion_client.calls[0][0]["content"]
    assert "Kennington driveway" in system_prompt
    assert "Piccadilly garage" not in system_prompt


def test_chat_nearby_without_matches_tells_the_model(client, app):
    client.post("/api/chat/nearby", json={
        "message": "parking?",
        "location": {"latitude": 51.4886, "longitude": -0.1004},
        "spaces": [MANCHESTER],
    })
    system_prompt = app.state.completion_client.calls[0][0]["content"]
    assert "There are no available spaces" in system_prompt


def test_chat_nearby_ignores_non_finite_coordinates(client, app):
    broken = {**BOROUGH, "title": "Broken pin", "latitude": "inf", "longitude": "nan"}
    resp = client.post("/api/chat/nearby", json={
        "message": "parking?",
        "location": {"latitude": 51.4886, "longitude": -0.1004},
        "spaces": [broken, KENNINGTON],
    })

    assert resp.status_code == 200
    assert [s["title"] for s in resp.json()["parkingSpaces"]] == ["Kennington driveway"]
