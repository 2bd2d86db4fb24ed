"""
Test health and metrics endpoints.
"""


def test_root(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_health_check(test_client):
    """Test the root health check."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "palettesync-backend"
    assert "version" in data


def test_v1_health_check(test_client):
    response = test_client.get("/v1/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "palettesync"
    assert isinstance(data["timestamp"], int)


def test_metrics_count_requests(test_client):
    """Metrics reflect requests made since the last reset."""
    test_client.post("/v1/harmony", json={"base": "#3B82F6", "kind": "triadic"})
    test_client.post("/v1/harmony", json={"base": "#3B82F6", "kind": "bogus"})

    response = test_client.get("/v1/metrics")
    assert response.status_code == 200
    data = response.json()
    assert data["counters"]["requests_total_harmony"] == 2
    assert data["counters"]["requests_total"] == 2
    assert "uptime_seconds" in data


def test_root_health_omits_timestamp(test_client):
    data = test_client.get("/healthz").json()
    assert set(data) == {"status", "service", "version"}


def test_openapi_documents_health_and_errors(test_client):
    schema = test_client.get("/openapi.json").json()
    components = schema["components"]["schemas"]
    assert {"HealthResponse", "ErrorResponse"} <= set(components)

    harmony_responses = schema["paths"]["/v1/harmony"]["post"]["responses"]
    assert harmony_responses["400"]["content"]["application/json"]["schema"]["$ref"].endswith(
        "/ErrorResponse"
    )
