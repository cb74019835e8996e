"""
Reader / Assist API 测试
"""


class TestReaderEndpoints:
    """测试伴读端点"""

    def test_translate_live(self, live_client):
        response = live_client("Hello").post(
            "/api/v1/reader/translate", json={"text": "Bonjour", "target_lang": "English"}
        )

        assert response.status_code == 200
        assert response.json() == {"text": "Hello"}

    def test_translate_offline(self, client):
        response = client.post("/api/v1/reader/translate", json={"text": "Bonjour"})

        assert response.json() == {"text": "Translation service unavailable."}

    def test_chat(self, live_client):
        response = live_client("Paul is the heir.").post(
            "/api/v1/reader/chat",
            json={"title": "Dune", "message": "Who is Paul?", "history": [{"role": "model", "text": "Hi"}]},
        )

        assert response.json() == {"text": "Paul is the heir."}

    def test_explain_offline(self, client):
        response = client.post("/api/v1/reader/explain", json={"text": "Call me Ishmael.", "title": "Moby-Dick"})

        assert response.json() == {"text": "Context service unavailable."}

    def test_chapter_is_sanitized(self, live_client):
        reply = '```html\n<h1>Chapter 2</h1><p onclick="x()">It began.</p><script>bad()</script>\n```'
        response = live_client(reply).get(
            "/api/v1/reader/chapters", params={"title": "Dune", "author": "Frank Herbert", "chapter": 2}
        )

        assert response.json() == {
            "title": "Dune",
            "chapter": 2,
            "html": "<h3>Chapter 2</h3><p>It began.</p>",
        }

    def test_chapter_zero_is_422(self, client):
        response = client.get("/api/v1/reader/chapters", params={"title": "Dune", "chapter": 0})

        assert response.status_code == 422

    def test_summary_and_recap_offline(self, client):
        assert client.get("/api/v1/reader/summary", params={"title": "Dune"}).json() == {
            "text": "Summary unavailable offline."
        }
        assert client.get("/api/v1/reader/recap", params={"title": "Dune"}).json() == {
            "text": "Recap unavailable offline."
        }


class TestAssistEndpoint:
    """测试 POST /api/v1/assist"""

    def test_text_capability(self, live_client):
        response = live_client("Hello").post("/api/v1/assist", json={"kind": "translate", "text": "Bonjour"})

        assert response.status_code == 200
        assert response.json() == {"kind": "translate", "result": "Hello"}

    def test_list_capability_is_serialized(self, client):
        response = client.post("/api/v1/assist", json={"kind": "reviews", "title": "Dune", "author": "Frank Herbert"})

        data = response.json()
        assert data["kind"] == "reviews"
        assert data["result"][0]["reviewer_name"] == "Offline Reader"

    def test_mood_capability(self, client):
        response = client.post("/api/v1/assist", json={"kind": "mood", "mood": "rainy afternoon"})

        data = response.json()
        assert data["kind"] == "mood"
        assert data["result"][0]["id"] == "off-1"

    def test_unknown_kind_is_422(self, client):
        assert client.post("/api/v1/assist", json={"kind": "dance"}).status_code == 422
