from aibuilder.services.project_rooms import ProjectRooms


def join(ws, project_id):
    ws.send_json({"event": "join-project", "data": project_id})
    assert ws.receive_json() == {"event": "joined", "data": project_id}


def test_code_update_reaches_other_members(client):
    with client.websocket_connect("/ws") as alice, \
            client.websocket_connect("/ws") as bob, \
            client.websocket_connect("/ws") as carol:
        join(alice, "p1")
        join(bob, "p1")
        join(carol, "p2")

        alice.send_json({"event": "code-update", "data": {"projectId": "p1", "code": "const A = 1;"}})
        assert bob.receive_json() == {"event": "code-updated", "data": "const A = 1;"}

        # neither the sender nor another room gets the update
        for ws in (alice, carol):
            ws.send_json({"event": "ping"})
            assert ws.receive_json() == {"event": "pong", "data": None}


def test_bad_messages_get_errors(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"event": "join-project", "data": ""})
        assert ws.receive_json() == {"event": "error", "data": "Project id required"}

        ws.send_json({"event": "dance"})
        assert ws.receive_json() == {"event": "error", "data": "Unknown event: dance"}

        ws.send_text("not json")
        assert ws.receive_json() == {"event": "error", "data": "Invalid message"}


def test_leaving_drops_empty_rooms():
    rooms = ProjectRooms()
    a, b = object(), object()
    rooms.join(a, "p1")
    rooms.join(b, "p1")
    rooms.join(a, "p2")

    rooms.leave_all(a)
    assert rooms.members("p1") == {b}
    assert rooms.members("p2") == set()
