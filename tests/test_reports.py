from conftest import me

REPORT = {"subject": "Math", "result": "positivo", "description": "ok", "date": "2024-04-01"}


def _create(client, headers, student_id, **extra):
    r = client.post("/reports", json={**REPORT, "studentId": student_id, **extra}, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()["report"]


def test_teacher_id_comes_from_the_token(client, teacher, student):
    """teacherId/teacherName in the body are ignored"""
    report = _create(client, teacher, student["id"], teacherId="someone-else", teacherName="Impostor")
    own = me(client, teacher)
    assert report["teacherId"] == own["id"]
    assert report["teacherName"] == "João Santos"
    assert report["result"] == "positivo"
    assert report["studentId"] == student["id"]
    assert report["createdAt"]


def test_coordinator_can_write_reports(client, coordinator, student):
    report = _create(client, coordinator, student["id"])
    assert report["teacherId"] == me(client, coordinator)["id"]


def test_result_defaults_to_neutral(client, teacher, student):
    payload = {"studentId": student["id"], "subject": "Art", "description": "sem novidades"}
    report = client.post("/reports", json=payload, headers=teacher).json()["report"]
    assert report["result"] == "neutro"


def test_invalid_result(client, teacher, student):
    response = client.post("/reports", json={**REPORT, "studentId": student["id"], "result": "otimo"},
                           headers=teacher)
    assert response.status_code == 400


def test_create_requires_auth(client, student):
    assert client.post("/reports", json={**REPORT, "studentId": student["id"]}).status_code == 401


def test_list_reports(client, teacher, other_teacher, student):
    mine = _create(client, teacher, student["id"])
    theirs = _create(client, other_teacher, student["id"], subject="History")
    listed = client.get(f"/reports/{student['id']}", headers=teacher).json()["reports"]
    assert {r["id"] for r in listed} == {mine["id"], theirs["id"]}


def test_author_updates_own_report(client, teacher, student):
    report = _create(client, teacher, student["id"])
    response = client.put(
        f"/reports/{student['id']}/{report['id']}",
        json={"result": "negativo", "studentId": "moved", "teacherId": "other", "id": "x"},
        headers=teacher,
    )
    assert response.status_code == 200, response.text
    updated = response.json()["report"]
    assert updated["id"] == report["id"]
    assert updated["studentId"] == student["id"]
    assert updated["teacherId"] == report["teacherId"]
    assert updated["result"] == "negativo"
    assert updated["subject"] == "Math"
    assert updated["updatedAt"]


def test_other_teacher_cannot_touch_report(client, teacher, other_teacher, student):
    report = _create(client, teacher, student["id"])
    path = f"/reports/{student['id']}/{report['id']}"
    assert client.put(path, json={"description": "x"}, headers=other_teacher).status_code == 403
    assert client.delete(path, headers=other_teacher).status_code == 403


def test_coordinator_cannot_touch_teacher_report(client, coordinator, teacher, student):
    """Ownership wins over role"""
    report = _create(client, teacher, student["id"])
    path = f"/reports/{student['id']}/{report['id']}"
    response = client.put(path, json={"description": "x"}, headers=coordinator)
    assert response.status_code == 403
    assert client.delete(path, headers=coordinator).status_code == 403


def test_update_rejects_empty_subject(client, teacher, student):
    report = _create(client, teacher, student["id"])
    response = client.put(f"/reports/{student['id']}/{report['id']}", json={"subject": ""}, headers=teacher)
    assert response.status_code == 400
    assert response.json()["detail"].startswith("subject:")


def test_update_missing_report(client, teacher, student):
    response = client.put(f"/reports/{student['id']}/missing", json={"description": "x"}, headers=teacher)
    assert response.status_code == 404


def test_author_deletes_report(client, teacher, student):
    report = _create(client, teacher, student["id"])
    path = f"/reports/{student['id']}/{report['id']}"
    response = client.delete(path, headers=teacher)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/reports/{student['id']}", headers=teacher).json()["reports"] == []
    assert client.delete(path, headers=teacher).status_code == 404
