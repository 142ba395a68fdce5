def test_register_topic_question_reply_flow(client):
    auth = client.post("/api/auth/register", json={"username": "alice", "password": "password1"})
    headers = {"Authorization": f"Bearer {auth.json()['token']}"}

    topic = client.post("/api/topics", json={"title": "Testing"}, headers=headers).json()
    question = client.post(
        "/api/questions", json={"title": "Q1", "body": "B1", "topicId": topic["id"]}, headers=headers
    ).json()
    client.post(f"/api/questions/{question['id']}/replies", json={"body": "R1"}, headers=headers)

    detail = client.get(f"/api/questions/{question['id']}").json()
    assert detail["title"] == "Q1"
    assert detail["topic_id"] == topic["id"]
    assert len(detail["replies"]) == 1
    assert detail["replies"][0]["body"] == "R1"
    assert detail["replies"][0]["author"] == "alice"
