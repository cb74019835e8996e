"""
Root / Health API 测试
"""


class TestRootEndpoints:
    """测试根路径与健康检查"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Suitcase Reader"

    def test_health_offline(self, client):
        """Given: 无凭证 When: 健康检查 Then: provider=static, live=False"""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "provider": "static", "live": False}

    def test_health_live(self, live_client):
        response = live_client("unused").get("/health")

        assert response.json() == {"status": "healthy", "provider": "groq", "live": True}
