from __future__ import annotations


def test_records_require_session(client):
    response = client.get("/api/records")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

    response = client.post("/api/records")
    assert response.status_code == 401


def test_records_reject_forged_cookie(client):
    client.cookies.set("auth-token", "not-a-token")
    response = client.get("/api/records")
    assert response.status_code == 401


def test_unfiltered_pagination_walks_the_dataset(auth_client):
    first = auth_client.get("/api/records", params={"cursor": 0, "limit": 100}).json()
    assert len(first["records"]) == 100
    assert first["nextCursor"] == first["records"][-1]["id"] == 100
    assert first["total"] == 250
    assert first["filteredTotal"] == 250

    second = auth_client.get("/api/records", params={"cursor": first["nextCursor"], "limit": 100}).json()
    assert [r["id"] for r in second["records"]] == list(range(101, 201))
    assert second["nextCursor"] == 200
    assert "total" not in second and "filteredTotal" not in second

    third = auth_client.get("/api/records", params={"cursor": second["nextCursor"], "limit": 100}).json()
    assert len(third["records"]) == 50
    assert third["nextCursor"] is None


def test_same_request_is_idempotent(auth_client):
    params = {"cursor": 40, "limit": 25, "statuses": "Active,Strike Off", "search": "company"}
    first = auth_client.get("/api/records", params=params).json()
    second = auth_client.get("/api/records", params=params).json()
    assert first == second


def test_single_status_filter(auth_client, companies):
    payload = auth_client.get("/api/records", params={"cursor": 0, "limit": 50, "statuses": "Active"}).json()
    active = [c for c in companies if c["company_status"] == "Active"]

    assert len(payload["records"]) == 50
    assert all(r["company_status"] == "Active" for r in payload["records"])
    assert payload["filteredTotal"] == len(active)
    assert payload["nextCursor"] == payload["records"][-1]["id"]


def test_short_filtered_page_signals_exhaustion(auth_client, companies):
    payload = auth_client.get("/api/records", params={"limit": 50, "classes": "Public", "years": "2005"}).json()
    expected = [
        c["id"]
        for c in companies
        if c["company_class"] == "Public"
        and c["company_registration_date"] is not None
        and c["company_registration_date"].year == 2005
    ]
    assert [r["id"] for r in payload["records"]] == expected
    assert len(expected) < 50
    assert payload["nextCursor"] is None


def test_search_matches_name_or_cin_case_insensitively(auth_client):
    payload = auth_client.get("/api/records", params={"limit": 250, "search": "ABC"}).json()
    assert payload["records"]
    for record in payload["records"]:
        assert "abc" in record["company_name"].lower() or "abc" in record["cin"].lower()
    names = {record["company_name"] for record in payload["records"]}
    assert "Fabcon Steel Limited" in names
    assert any(record["cin"].startswith("abc") for record in payload["records"])


def test_multi_dimension_filters_and_state_codes(auth_client, companies):
    params = {
        "limit": 1000,
        "statuses": "Active,Amalgamated",
        "stateCodes": "TAMIL NADU",
        "industries": "Banking,Textiles",
    }
    payload = auth_client.get("/api/records", params=params).json()
    expected = [
        c["id"]
        for c in companies
        if c["company_status"] in {"Active", "Amalgamated"}
        and c["company_state_code"] == "TAMIL NADU"
        and c["company_industrial_classification"] in {"Banking", "Textiles"}
    ]
    assert [r["id"] for r in payload["records"]] == expected
    assert payload["filteredTotal"] == len(expected)


def test_record_shape(auth_client):
    record = auth_client.get("/api/records", params={"limit": 1}).json()["records"][0]
    assert record["id"] == 1
    assert record["company_registration_date"] == "2001-02-02"
    assert record["authorized_capital"] == 1000.0
    assert record["paidup_capital"] == 500.0
    assert record["listing_status"] == "Unlisted"


def test_null_capital_and_date_are_preserved(auth_client):
    records = auth_client.get("/api/records", params={"limit": 50}).json()["records"]
    by_id = {r["id"]: r for r in records}
    assert by_id[7]["authorized_capital"] is None
    assert by_id[7]["paidup_capital"] is None
    assert by_id[50]["company_registration_date"] is None


def test_invalid_parameters_are_rejected(auth_client):
    assert auth_client.get("/api/records", params={"cursor": "abc"}).status_code == 400
    assert auth_client.get("/api/records", params={"cursor": "-5"}).status_code == 400
    response = auth_client.get("/api/records", params={"years": "twenty"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_limit_is_clamped(auth_client):
    payload = auth_client.get("/api/records", params={"limit": 0}).json()
    assert len(payload["records"]) == 1

    payload = auth_client.get("/api/records", params={"limit": 100000}).json()
    assert len(payload["records"]) == 250
    assert payload["nextCursor"] is None


def test_filter_options(auth_client):
    response = auth_client.post("/api/records")
    assert response.status_code == 200
    options = response.json()

    assert [o["value"] for o in options["statuses"]] == ["Active", "Amalgamated", "Strike Off"]
    assert all(o["label"] == o["value"] for o in options["statuses"])
    assert [o["value"] for o in options["classes"]] == ["One Person Company", "Private", "Public"]

    years = [int(o["value"]) for o in options["years"]]
    assert years == sorted(years, reverse=True)
    assert years[0] == 2024 and years[-1] == 2000

    assert options["stateCodes"] == [
        {"value": "KARNATAKA", "label": "Karnataka"},
        {"value": "TAMIL NADU", "label": "Tamil Nadu"},
    ]
    assert len(options["industries"]) == 5
