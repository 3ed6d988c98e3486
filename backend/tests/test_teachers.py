def add_teacher(client, headers, surname="Иванов", name="Иван", patronymic="Иванович", hours=120):
    payload = {"surname": surname, "name": name, "patronymic": patronymic, "aH": hours}
    return client.post("/teacher/add", json=payload, headers=headers)


def test_add_and_get_teachers(client, admin_headers, user_headers):
    response = add_teacher(client, admin_headers)
    assert response.status_code == 200
    assert "Иванов Иван Иванович" in response.json()["message"]

    teachers = client.get("/teacher/get", headers=user_headers).json()["teachers"]
    assert len(teachers) == 1
    teacher = teachers[0]
    assert (teacher["aH"], teacher["hH"], teacher["burden"]) == (120, 0, [])

    single = client.get("/teacher/get", params={"id": teacher["id"]}, headers=user_headers)
    assert single.status_code == 200
    assert single.json()["teacher"]["surname"] == "Иванов"

    assert client.get("/teacher/get", params={"id": "missing"}, headers=user_headers).status_code == 404


def test_duplicate_full_name_is_rejected(client, admin_headers):
    assert add_teacher(client, admin_headers).status_code == 200
    assert add_teacher(client, admin_headers).status_code == 409

    namesake = add_teacher(client, admin_headers, name="Пётр")
    assert namesake.status_code == 200

    surname_only = add_teacher(client, admin_headers, surname="Петров", name=None, patronymic=None)
    assert surname_only.status_code == 200
    again = add_teacher(client, admin_headers, surname="Петров", name=None, patronymic=None)
    assert again.status_code == 409


def test_edit_teacher_overwrites_fields(client, admin_headers):
    add_teacher(client, admin_headers)
    teacher_id = client.get("/teacher/get", headers=admin_headers).json()["teachers"][0]["id"]

    response = client.post(
        "/teacher/edit",
        json={"id": teacher_id, "surname": "Сидоров", "aH": 90},
        headers=admin_headers,
    )
    assert response.status_code == 200

    teacher = client.get("/teacher/get", params={"id": teacher_id}, headers=admin_headers).json()["teacher"]
    assert (teacher["surname"], teacher["name"], teacher["patronymic"], teacher["aH"]) == ("Сидоров", None, None, 90)


def test_delete_teacher(client, admin_headers):
    add_teacher(client, admin_headers)
    teacher_id = client.get("/teacher/get", headers=admin_headers).json()["teachers"][0]["id"]

    assert client.delete("/teacher/delete", params={"id": teacher_id}, headers=admin_headers).status_code == 200
    assert client.get("/teacher/get", headers=admin_headers).json()["teachers"] == []
    assert client.delete("/teacher/delete", params={"id": teacher_id}, headers=admin_headers).status_code == 404


def test_teachers_by_discipline_reports_free_teachers(client, admin_headers, user_headers, catalog):
    lesson = {
        "discipline": catalog["discipline"],
        "teacher": catalog["smith"],
        "type": catalog["type"],
        "audithoria": catalog["room_101"],
        "number": 1,
    }
    created = client.post(
        "/schedule/add",
        json={"date": "2024-03-05", "group": catalog["group"], "items": [lesson]},
        headers=admin_headers,
    )
    assert created.status_code == 200

    march = client.get(
        "/teacher/getTeacherByDiscipline",
        params={"id": catalog["discipline"], "date": "2024-03-15"},
        headers=user_headers,
    )
    assert march.status_code == 200
    body = march.json()
    # Jones has no accumulated hours yet, so it is ranked as the least loaded.
    assert [teacher["surname"] for teacher in body["teachers"]] == ["Jones", "Smith"]
    assert [teacher["surname"] for teacher in body["teachersFree"]] == ["Jones"]

    april = client.get(
        "/teacher/getTeacherByDiscipline",
        params={"id": catalog["discipline"], "date": "2024-04-01"},
        headers=user_headers,
    ).json()
    assert [teacher["surname"] for teacher in april["teachersFree"]] == ["Jones", "Smith"]

    missing = client.get(
        "/teacher/getTeacherByDiscipline",
        params={"id": "missing", "date": "2024-03-15"},
        headers=user_headers,
    )
    assert missing.status_code == 404


def test_sole_teacher_of_a_discipline_cannot_be_deleted(client, admin_headers, catalog):
    client.post(
        "/discipline/add",
        json={"name": "Physics", "groups": ["CS-К1"], "teachers": ["Curie"], "aH": 20},
        headers=admin_headers,
    )
    physics = client.get("/discipline/getByName", params={"name": "Physics"}, headers=admin_headers).json()
    curie_id = physics["discipline"]["teachers"][0]["id"]

    refused = client.delete("/teacher/delete", params={"id": curie_id}, headers=admin_headers)
    assert refused.status_code == 409
    assert "Physics" in refused.json()["message"]
    surnames = [teacher["surname"] for teacher in client.get("/teacher/get", headers=admin_headers).json()["teachers"]]
    assert "Curie" in surnames

    # Algorithms keeps Jones, so Smith may go.
    assert client.delete("/teacher/delete", params={"id": catalog["smith"]}, headers=admin_headers).status_code == 200
    algorithms = client.get("/discipline/getByName", params={"name": "Algorithms"}, headers=admin_headers).json()
    assert [teacher["surname"] for teacher in algorithms["discipline"]["teachers"]] == ["Jones"]
    assert client.delete("/teacher/delete", params={"id": catalog["jones"]}, headers=admin_headers).status_code == 409
