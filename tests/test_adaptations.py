from datetime import date

from conftest import STUDENT_ANA, me

ADAPTATION = {"description": "Tempo extra nas provas", "justification": "TDAH", "date": "2024-02-10"}


def _create(client, headers, student_id, **extra):
    r = client.post("/adaptations", json={**ADAPTATION, "studentId": student_id, **extra}, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()["adaptation"]


def test_create_and_list_scoped_by_student(client, coordinator, teacher, student):
    other = client.post("/students", json={**STUDENT_ANA, "name": "Bruno"}, headers=coordinator).json()["student"]
    first = _create(client, coordinator, student["id"])
    _create(client, coordinator, other["id"])

    assert first["studentId"] == student["id"]
    assert first["createdBy"] == me(client, coordinator)["id"]
    assert first["date"] == "2024-02-10"

    listed = client.get(f"/adaptations/{student['id']}", headers=teacher).json()["adaptations"]
    assert listed == [first]


def test_date_defaults_to_today(client, coordinator, student):
    adaptation = _create(client, coordinator, student["id"], date=None)
    assert adaptation["date"] == date.today().isoformat()


def test_list_requires_auth(client, student):
    assert client.get(f"/adaptations/{student['id']}").status_code == 401


def test_teacher_cannot_manage_adaptations(client, coordinator, teacher, student):
    adaptation = _create(client, coordinator, student["id"])
    path = f"/adaptations/{student['id']}/{adaptation['id']}"

    assert client.post("/adaptations", json={**ADAPTATION, "studentId": student["id"]},
                       headers=teacher).status_code == 403
    assert client.post("/adaptations", json={"nonsense": True}, headers=teacher).status_code == 403
    assert client.put(path, json={"description": "x"}, headers=teacher).status_code == 403
    assert client.delete(path, headers=teacher).status_code == 403


def test_create_missing_justification(client, coordinator, student):
    response = client.post("/adaptations", json={"studentId": student["id"], "description": "x"},
                           headers=coordinator)
    assert response.status_code == 400


def test_update_keeps_id_and_student(client, coordinator, student):
    adaptation = _create(client, coordinator, student["id"])
    response = client.put(
        f"/adaptations/{student['id']}/{adaptation['id']}",
        json={"id": "other", "studentId": "someone-else", "justification": "Laudo médico"},
        headers=coordinator,
    )
    assert response.status_code == 200, response.text
    updated = response.json()["adaptation"]
    assert updated["id"] == adaptation["id"]
    assert updated["studentId"] == student["id"]
    assert updated["justification"] == "Laudo médico"
    assert updated["description"] == adaptation["description"]
    assert updated["updatedAt"]


def test_update_rejects_empty_justification(client, coordinator, student):
    adaptation = _create(client, coordinator, student["id"])
    response = client.put(f"/adaptations/{student['id']}/{adaptation['id']}",
                          json={"justification": ""}, headers=coordinator)
    assert response.status_code == 400


def test_update_under_wrong_student_is_not_found(client, coordinator, student):
    adaptation = _create(client, coordinator, student["id"])
    response = client.put(f"/adaptations/other/{adaptation['id']}", json={"description": "x"},
                          headers=coordinator)
    assert response.status_code == 404


def test_delete_is_independent(client, coordinator, student):
    first = _create(client, coordinator, student["id"])
    second = _create(client, coordinator, student["id"], description="Ledor")

    response = client.delete(f"/adaptations/{student['id']}/{first['id']}", headers=coordinator)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    remaining = client.get(f"/adaptations/{student['id']}", headers=coordinator).json()["adaptations"]
    assert [a["id"] for a in remaining] == [second["id"]]
    assert len(client.get("/students", headers=coordinator).json()["students"]) == 1

    again = client.delete(f"/adaptations/{student['id']}/{first['id']}", headers=coordinator)
    assert again.status_code == 404
