import pytest
from unittest.mock import AsyncMock, patch
from app.core.config import settings
from app.core.errors import FetchError

class TestIntegrationMenu:
    """Integration tests for the /menu endpoints"""

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_menu_success(self, mock_fetch, client, n58_html):
        """Test successful menu fetch and parse"""
        mock_fetch.return_value = n58_html

        response = client.get("/menu/N58")

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == "N58"
        assert data["cached"] is False
        assert [d["day"] for d in data["days"]] == ["MANDAG", "TIRSDAG", "ONSDAG", "TORSDAG", "FREDAG"]

        days = {d["day"]: d["menu"] for d in data["days"]}
        assert days["MANDAG"]["main_dish"] == "Fiskesuppe"
        assert days["MANDAG"]["dish_list"] == ["Fiskesuppe"]
        assert days["MANDAG"]["salad"] == ""
        assert days["ONSDAG"] is None

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_second_request_uses_cache(self, mock_fetch, client, fb38_html):
        """Second request within two hours does not hit the network"""
        mock_fetch.return_value = fb38_html

        first = client.get("/menu/FB38").json()
        second = client.get("/menu/FB38").json()

        assert mock_fetch.await_count == 1
        assert first["cached"] is False
        assert second["cached"] is True
        assert first["days"] == second["days"]

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_selected_location_from_preferences(self, mock_fetch, client, fb38_html):
        mock_fetch.return_value = fb38_html
        client.put("/preferences", json={"selected_location": "FB38"})

        response = client.get("/menu")

        assert response.status_code == 200
        assert response.json()["location"] == "FB38"
        mock_fetch.assert_awaited_once_with(settings.FB38_URL)

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_unknown_location(self, mock_fetch, client):
        response = client.get("/menu/fb38")

        assert response.status_code == 400
        assert "Unknown location" in response.json()["detail"]
        mock_fetch.assert_not_awaited()

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_fetch_error(self, mock_fetch, client):
        """Test handling of fetch errors"""
        mock_fetch.side_effect = FetchError("HTTP error 503 for https://drittserver.net/lunsj/")

        response = client.get("/menu/N58")

        assert response.status_code == 502
        assert "failed to fetch" in response.json()["detail"].lower()

class TestIntegrationTimeline:
    """Integration tests for the widget timeline endpoint"""

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_week_timeline(self, mock_fetch, client, n58_html):
        mock_fetch.return_value = n58_html

        response = client.get("/timeline/N58")

        assert response.status_code == 200
        data = response.json()
        assert [e["day"] for e in data["entries"]] == ["MANDAG", "TIRSDAG", "ONSDAG", "TORSDAG", "FREDAG"]
        assert "refresh_after" in data

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_today_timeline(self, mock_fetch, client, n58_html):
        mock_fetch.return_value = n58_html

        response = client.get("/timeline/N58", params={"kind": "today"})

        assert response.status_code == 200
        assert len(response.json()["entries"]) == 1

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_timeline_falls_back_to_placeholders(self, mock_fetch, client):
        mock_fetch.side_effect = FetchError("offline")

        response = client.get("/timeline/FB38")

        assert response.status_code == 200
        entries = response.json()["entries"]
        assert len(entries) == 5
        assert all(e["menu"]["main_dish"] == "Ingen meny tilgjengelig" for e in entries)

    def test_invalid_kind(self, client):
        response = client.get("/timeline/N58", params={"kind": "month"})
        assert response.status_code == 422

class TestPaymentLink:
    """Integration tests for the online payment page links"""

    @pytest.mark.parametrize("location, host", [
        ("FB38", "www.alreadyordered.no"),
        ("N58", "www.goldbyopen.no"),
    ])
    def test_payment_link_per_location(self, client, location, host):
        response = client.get(f"/payment/{location}")

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == location
        assert data["url"] == settings.pay_url_for(location)
        assert data["url"].startswith(f"https://{host}/")

    def test_unknown_location(self, client):
        response = client.get("/payment/OSL")

        assert response.status_code == 400
        assert "Unknown location" in response.json()["detail"]

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_menu_response_carries_pay_url(self, mock_fetch, client, fb38_html):
        mock_fetch.return_value = fb38_html

        data = client.get("/menu/FB38").json()

        assert data["pay_url"] == settings.FB38_PAY_URL

class TestCacheAndPreferences:
    """Integration tests for cache clearing and preferences"""

    @patch('app.fetch.scraper.fetch_html', new_callable=AsyncMock)
    def test_clear_cache_forces_refetch(self, mock_fetch, client, n58_html):
        mock_fetch.return_value = n58_html
        client.get("/menu/N58")

        response = client.delete("/cache/clear")
        assert response.status_code == 200
        assert response.json()["removed"] == 1

        assert client.get("/menu/N58").json()["cached"] is False
        assert mock_fetch.await_count == 2

    def test_clear_empty_cache(self, client):
        response = client.delete("/cache/clear")
        assert response.status_code == 200
        assert response.json()["removed"] == 0

    def test_preferences_defaults(self, client):
        data = client.get("/preferences").json()
        assert data["selected_location"] == "N58"
        assert data["show_whole_menu"] is True

    def test_preferences_partial_update(self, client):
        response = client.put("/preferences", json={"show_soup": False})
        assert response.status_code == 200

        data = client.get("/preferences").json()
        assert data["show_soup"] is False
        assert data["selected_location"] == "N58"

    @pytest.mark.parametrize("body", [{"selected_location": "OSL"}, {"unknown": True}])
    def test_preferences_validation(self, client, body):
        assert client.put("/preferences", json=body).status_code == 422

class TestHealthEndpoints:
    """Test health and utility endpoints"""

    def test_health_endpoint(self, client):
        """Test health check endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_endpoint(self, client):
        """Test root endpoint"""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert "endpoints" in data
