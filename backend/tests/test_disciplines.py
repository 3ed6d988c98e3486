def add_discipline(client, headers, name="Algorithms", groups=None, teachers=None, hours=30):
    payload = {
        "name": name,
        "groups": groups if groups is not None else ["CS-К1"],
        "teachers": teachers if teachers is not None else ["Smith"],
        "aH": hours,
    }
    return client.post("/discipline/add", json=payload, headers=headers)


def test_add_discipline_creates_missing_groups_and_teachers(client, admin_headers):
    response = add_discipline(client, admin_headers)
    assert response.status_code == 200
    assert "Algorithms" in response.json()["message"]

    detail = client.get("/discipline/getByName", params={"name": "Algorithms"}, headers=admin_headers)
    assert detail.status_code == 200
    discipline = detail.json()["discipline"]
    assert discipline["aH"] == 30
    assert [(group["name"], group["course"]) for group in discipline["groups"]] == [("CS-К1", "1")]
    assert [teacher["surname"] for teacher in discipline["teachers"]] == ["Smith"]

    teachers = client.get("/teacher/get", headers=admin_headers).json()["teachers"]
    assert [(teacher["surname"], teacher["aH"], teacher["hH"]) for teacher in teachers] == [("Smith", 0, 0)]


def test_add_discipline_reuses_existing_records(client, admin_headers):
    add_discipline(client, admin_headers)
    response = add_discipline(client, admin_headers, name="Databases", groups=["CS-К1", "CS-К2"])
    assert response.status_code == 200

    teachers = client.get("/teacher/get", headers=admin_headers).json()["teachers"]
    assert len(teachers) == 1

    by_group = client.get("/discipline/getByGroup", params={"name": "CS-К1"}, headers=admin_headers)
    assert by_group.status_code == 200
    assert [item["name"] for item in by_group.json()["disciplines"]] == ["Algorithms", "Databases"]

    second_year = client.get("/discipline/getByGroup", params={"name": "CS-К2"}, headers=admin_headers)
    assert [item["name"] for item in second_year.json()["disciplines"]] == ["Databases"]


def test_add_discipline_rejections(client, admin_headers):
    add_discipline(client, admin_headers)

    duplicate = add_discipline(client, admin_headers, teachers=["Jones"])
    assert duplicate.status_code == 400
    assert "Algorithms" in duplicate.json()["message"]

    no_teachers = add_discipline(client, admin_headers, name="Networks", teachers=[])
    assert no_teachers.status_code == 400

    bad_group = add_discipline(client, admin_headers, name="Networks", groups=["CS1"])
    assert bad_group.status_code == 400

    listing = client.get("/discipline/get", headers=admin_headers).json()["disciplines"]
    assert [item["name"] for item in listing] == ["Algorithms"]
    surnames = [teacher["surname"] for teacher in client.get("/teacher/get", headers=admin_headers).json()["teachers"]]
    assert surnames == ["Smith"]


def test_lookups_report_missing_records(client, admin_headers):
    assert client.get("/discipline/getByName", params={"name": "Nope"}, headers=admin_headers).status_code == 404
    assert client.get("/discipline/getByGroup", params={"name": "XX-К1"}, headers=admin_headers).status_code == 404


def test_edit_discipline_overwrites_members(client, admin_headers):
    add_discipline(client, admin_headers)
    discipline_id = client.get("/discipline/get", headers=admin_headers).json()["disciplines"][0]["id"]

    response = client.put(
        "/discipline/edit",
        json={"id": discipline_id, "name": "Algorithms II", "groups": ["CS-К2"], "teachers": ["Jones"], "aH": 40},
        headers=admin_headers,
    )
    assert response.status_code == 200

    discipline = client.get(
        "/discipline/getByName", params={"name": "Algorithms II"}, headers=admin_headers
    ).json()["discipline"]
    assert discipline["aH"] == 40
    assert [group["name"] for group in discipline["groups"]] == ["CS-К2"]
    assert [teacher["surname"] for teacher in discipline["teachers"]] == ["Jones"]


def test_delete_discipline(client, admin_headers):
    add_discipline(client, admin_headers)
    discipline_id = client.get("/discipline/get", headers=admin_headers).json()["disciplines"][0]["id"]

    response = client.delete("/discipline/delete", params={"id": discipline_id}, headers=admin_headers)
    assert response.status_code == 200
    assert client.get("/discipline/get", headers=admin_headers).json()["disciplines"] == []
    assert client.delete("/discipline/delete", params={"id": discipline_id}, headers=admin_headers).status_code == 404
