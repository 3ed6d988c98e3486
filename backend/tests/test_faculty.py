def create_faculty(client, headers, name="Информатика", groups=None):
    payload = {"name": name, "groups": groups if groups is not None else ["ИС-К1", "ИС-К2", "ПИ-К1"]}
    return client.post("/facultet/add", json=payload, headers=headers)


def test_create_and_list_faculties(client, admin_headers, user_headers):
    response = create_faculty(client, admin_headers)
    assert response.status_code == 200
    assert response.json() == {"result": True, "message": "Факультет Информатика был успешно создан"}

    assert create_faculty(client, admin_headers, name="Экономика", groups=[]).status_code == 200

    listing = client.get("/facultet/get", headers=user_headers)
    assert listing.status_code == 200
    facultets = listing.json()["facultets"]
    assert [faculty["name"] for faculty in facultets] == ["Информатика", "Экономика"]

    informatics = facultets[0]
    assert "_id" in informatics
    assert [course["name"] for course in informatics["courses"]] == ["1", "2"]
    assert [group["name"] for group in informatics["courses"][0]["groups"]] == ["ИС-К1", "ПИ-К1"]
    assert [group["name"] for group in informatics["courses"][1]["groups"]] == ["ИС-К2"]
    assert all("_id" in group for group in informatics["courses"][0]["groups"])
    assert facultets[1]["courses"] == []


def test_create_faculty_rejections_leave_store_unchanged(client, admin_headers):
    assert create_faculty(client, admin_headers).status_code == 200

    duplicate = create_faculty(client, admin_headers, groups=["ЭК-К1"])
    assert duplicate.status_code == 400

    taken_group = create_faculty(client, admin_headers, name="Физика", groups=["ИС-К1"])
    assert taken_group.status_code == 400
    assert "ИС-К1" in taken_group.json()["message"]

    bad_name = create_faculty(client, admin_headers, name="Химия", groups=["ХИМ1"])
    assert bad_name.status_code == 400
    assert bad_name.json()["errors"] == [{"field": "groups", "message": "ХИМ1"}]

    listing = client.get("/facultet/get", headers=admin_headers).json()["facultets"]
    assert [faculty["name"] for faculty in listing] == ["Информатика"]


def test_get_one_faculty(client, admin_headers):
    create_faculty(client, admin_headers)
    faculty_id = client.get("/facultet/get", headers=admin_headers).json()["facultets"][0]["_id"]

    response = client.get("/facultet/getOne", params={"id": faculty_id}, headers=admin_headers)
    assert response.status_code == 200
    assert len(response.json()["facultets"]) == 1

    missing = client.get("/facultet/getOne", params={"id": "missing"}, headers=admin_headers)
    assert missing.status_code == 404


def test_edit_faculty_replaces_groups(client, admin_headers):
    create_faculty(client, admin_headers)
    faculty_id = client.get("/facultet/get", headers=admin_headers).json()["facultets"][0]["_id"]

    response = client.post(
        "/facultet/edit",
        json={"id": faculty_id, "name": "Информатика и ВТ", "groups": ["ИС-К1", "ВТ-К3"]},
        headers=admin_headers,
    )
    assert response.status_code == 200

    faculty = client.get("/facultet/getOne", params={"id": faculty_id}, headers=admin_headers).json()["facultets"][0]
    assert faculty["name"] == "Информатика и ВТ"
    assert {course["name"]: [group["name"] for group in course["groups"]] for course in faculty["courses"]} == {
        "1": ["ИС-К1"],
        "3": ["ВТ-К3"],
    }


def test_edit_faculty_rejects_groups_of_another_faculty(client, admin_headers):
    create_faculty(client, admin_headers)
    create_faculty(client, admin_headers, name="Экономика", groups=["ЭК-К1"])
    facultets = client.get("/facultet/get", headers=admin_headers).json()["facultets"]
    economics_id = next(item["_id"] for item in facultets if item["name"] == "Экономика")

    response = client.post(
        "/facultet/edit",
        json={"id": economics_id, "name": "Экономика", "groups": ["ЭК-К1", "ИС-К1"]},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "ИС-К1" in response.json()["message"]


def test_delete_faculty_detaches_groups(client, admin_headers):
    create_faculty(client, admin_headers, groups=["ИС-К1"])
    faculty_id = client.get("/facultet/get", headers=admin_headers).json()["facultets"][0]["_id"]

    response = client.delete("/facultet/delete", params={"id": faculty_id}, headers=admin_headers)
    assert response.status_code == 200
    assert client.get("/facultet/get", headers=admin_headers).json()["facultets"] == []

    # The group outlives its faculty, so it still blocks reuse of the name.
    again = create_faculty(client, admin_headers, name="Новый", groups=["ИС-К1"])
    assert again.status_code == 400

    assert client.delete("/facultet/delete", params={"id": faculty_id}, headers=admin_headers).status_code == 404


def test_faculty_writes_require_admin(client, user_headers):
    response = create_faculty(client, user_headers)
    assert response.status_code == 403
