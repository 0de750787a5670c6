"""
Test health endpoint for the SkinTone service.
"""
from skintone import __version__


def test_health_check(test_client):
    """Health endpoint reports service name and version."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()

    assert data["ok"] is True
    assert data["version"] == __version__
    assert data["service"] == "skintone-analysis"
