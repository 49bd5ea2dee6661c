from conftest import STUDENT_ANA


def test_missing_student(client, teacher):
    response = client.get("/student-report/missing", headers=teacher)
    assert response.status_code == 404
    assert response.json()["detail"] == "Student not found"


def test_requires_auth(client, student):
    assert client.get(f"/student-report/{student['id']}").status_code == 401


def test_full_report_is_scoped_and_sorted(client, coordinator, teacher, student):
    sid = student["id"]
    other = client.post("/students", json={**STUDENT_ANA, "name": "Bruno"}, headers=coordinator).json()["student"]

    client.post("/adaptations", json={"studentId": sid, "description": "Ledor", "justification": "Dislexia"},
                headers=coordinator)
    client.post("/adaptations", json={"studentId": other["id"], "description": "x", "justification": "y"},
                headers=coordinator)
    for day in ("2024-01-10", "2024-03-05T09:30:00+00:00", "2023-12-31"):
        r = client.post("/reports", json={
            "studentId": sid, "subject": "Math", "description": day, "date": day,
        }, headers=teacher)
        assert r.status_code == 200, r.text
    client.post("/reports", json={"studentId": other["id"], "subject": "Art", "description": "other"},
                headers=teacher)

    response = client.get(f"/student-report/{sid}", headers=teacher)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["student"] == student
    assert len(body["adaptations"]) == 1
    assert all(a["studentId"] == sid for a in body["adaptations"])
    assert all(r["studentId"] == sid for r in body["reports"])
    assert [r["date"] for r in body["reports"]] == ["2024-03-05T09:30:00+00:00", "2024-01-10", "2023-12-31"]
