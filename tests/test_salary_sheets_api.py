def _sheet(client, **overrides):
    body = {"month": "08", "year": 2025, "totalDays": 31}
    body.update(overrides)
    return client.post("/api/salary-sheets", json=body)


def test_create_snapshots_current_employees(client, make_employee):
    make_employee(attendance=["P"] * 31)
    r = _sheet(client)
    assert r.status_code == 201
    sheet = r.get_json()
    assert sheet["totalDays"] == 31
    assert len(sheet["employeeData"]) == 1
    row = sheet["employeeData"][0]
    assert row["name"] == "Ram Kumar"
    assert row["netSalary"] == 22560

    # later edits do not touch the stored sheet
    client.put(f"/api/employees/{row['id']}", json={"basic": 1})
    again = client.get(f"/api/salary-sheets/{sheet['id']}").get_json()
    assert again["employeeData"][0]["netSalary"] == 22560


def test_create_with_explicit_rows(client):
    r = _sheet(client, employeeData=[{"name": "Manual"}])
    assert r.status_code == 201
    assert r.get_json()["employeeData"] == [{"name": "Manual"}]


def test_create_validates_period(client):
    r = _sheet(client, totalDays=0)
    assert r.status_code == 400
    assert "totalDays" in r.get_json()["errors"]
    assert client.get("/api/salary-sheets").get_json() == []


def test_list_update_delete(client):
    first = _sheet(client, month="07").get_json()
    second = _sheet(client, month="08").get_json()
    listed = [s["id"] for s in client.get("/api/salary-sheets").get_json()]
    assert listed == [second["id"], first["id"]]

    r = client.put(f"/api/salary-sheets/{first['id']}", json={"totalDays": 30})
    assert r.status_code == 200
    assert r.get_json()["totalDays"] == 30
    assert r.get_json()["month"] == "07"

    assert client.delete(f"/api/salary-sheets/{first['id']}").status_code == 204
    assert client.get(f"/api/salary-sheets/{first['id']}").status_code == 404


def test_missing_sheet_is_404(client):
    assert client.get("/api/salary-sheets/nope").status_code == 404
    assert client.put("/api/salary-sheets/nope", json={}).status_code == 404
    assert client.delete("/api/salary-sheets/nope").status_code == 404
