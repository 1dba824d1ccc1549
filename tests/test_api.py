from fastapi.testclient import TestClient

from eduverse.core.security import create_certificate_token
from eduverse.core.store import MemoryStore
from eduverse.main import create_app

from conftest import login


def _complete_course(client, course_id, lesson_ids):
    for lesson_id in lesson_ids:
        response = client.post(f"/courses/{course_id}/lessons/{lesson_id}/complete")
        assert response.status_code == 200
    return response.json()


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_login_picker_and_session(client):
    users = client.get("/auth/users").json()
    assert [u["id"] for u in users] == ["u1", "u2", "u3", "u4", "u5"]

    assert client.get("/auth/me").status_code == 401

    user = login(client, "u1")
    assert user["name"] == "Alice Johnson"
    assert client.get("/auth/me").json()["id"] == "u1"

    response = client.post("/auth/logout")
    assert response.json() == {"current_user": None}
    assert client.get("/auth/me").status_code == 401


def test_login_unknown_user_keeps_session(client):
    login(client, "u2")
    response = client.post("/auth/login", json={"user_id": "ghost"})
    assert response.status_code == 404
    assert client.get("/auth/me").json()["id"] == "u2"


def test_catalog_requires_session(client):
    assert client.get("/courses/").status_code == 401


def test_catalog_filters_and_progress(client):
    login(client, "u1")

    courses = client.get("/courses/", params={"category": "Web Development"}).json()
    assert [c["id"] for c in courses] == ["c1", "c3"]
    assert courses[0]["enrollment"]["progress"] == 33
    assert courses[0]["instructor"]["id"] == "u3"

    searched = client.get("/courses/", params={"search": "sass"}).json()
    assert [c["id"] for c in searched] == ["c2"]
    assert searched[0]["enrollment"] is None

    assert client.get("/courses/categories").json() == ["All", "Web Development", "Web Design"]


def test_course_detail(client):
    login(client, "u2")
    detail = client.get("/courses/c2").json()
    assert detail["course"]["title"] == "Advanced CSS and Sass"
    assert detail["prerequisite"]["id"] == "c3"
    assert detail["prerequisite_satisfied"] is True
    assert detail["enrollment"] is None

    c3 = client.get("/courses/c3").json()
    assert c3["average_rating"] == 4.5
    assert [r["id"] for r in c3["reviews"]] == ["r2", "r1"]
    assert c3["reviews"][0]["user_name"] == "Bob Williams"

    assert client.get("/courses/nope").status_code == 404


def test_enroll_blocked_by_prerequisite(client, manager):
    login(client, "u4")
    response = client.post("/admin/users/", json={"name": "Fresh", "email": "fresh@edu.com"})
    assert response.status_code == 201
    fresh_id = response.json()["id"]

    login(client, fresh_id)
    response = client.post("/courses/c2/enroll")
    assert response.status_code == 403
    assert "HTML5 for Beginners" in response.json()["detail"]
    assert manager.get_enrollment(fresh_id, "c2") is None

    assert client.post("/courses/c3/enroll").status_code == 200
    _complete_course(client, "c3", ["c3l1"])
    assert client.post("/courses/c2/enroll").json()["progress"] == 0


def test_enroll_twice_returns_same_enrollment(client, manager):
    login(client, "u2")
    first = client.post("/courses/c1/enroll").json()
    second = client.post("/courses/c1/enroll").json()
    assert first == second
    assert len([e for e in manager.enrollments if e.user_id == "u2" and e.course_id == "c1"]) == 1


def test_lesson_access_requires_enrollment(client):
    login(client, "u2")
    assert client.get("/courses/c1/lessons/c1l1").status_code == 403
    client.post("/courses/c1/enroll")
    lesson = client.get("/courses/c1/lessons/c1l2").json()
    assert lesson["attachments"][0]["name"] == "React_Docs.pdf"
    assert client.get("/courses/c1/lessons/nope").status_code == 404


def test_complete_lesson_requires_enrollment(client, manager):
    login(client, "u2")
    response = client.post("/courses/c1/lessons/c1l1/complete")
    assert response.status_code == 403
    assert manager.get_enrollment("u2", "c1") is None


def test_complete_lesson_returns_next_view(client):
    login(client, "u1")
    result = client.post("/courses/c1/lessons/c1l2/complete").json()
    assert result["enrollment"]["progress"] == 67
    assert result["next_view"] == {"page": "lesson", "course_id": "c1", "lesson_id": "c1l3"}

    result = client.post("/courses/c1/lessons/c1l3/complete").json()
    assert result["enrollment"]["progress"] == 100
    assert result["next_view"] == {"page": "quiz", "course_id": "c1", "quiz_id": "q1"}

    navigation = client.get("/navigation").json()
    assert navigation["current"]["page"] == "quiz"


def test_reviews(client):
    login(client, "u1")
    response = client.post("/courses/c1/reviews", json={"rating": 4, "comment": "Clear"})
    assert response.status_code == 201
    assert response.json()[0]["comment"] == "Clear"

    assert client.post("/courses/c1/reviews", json={"rating": 6}).status_code == 422
    assert len(client.get("/courses/c1/reviews").json()) == 1


def test_quiz_hides_answers(client):
    login(client, "u2")
    quiz = client.get("/quizzes/q1").json()
    assert len(quiz["questions"]) == 3
    assert "correct_answer_index" not in quiz["questions"][0]
    assert client.get("/quizzes/nope").status_code == 404


def test_submit_quiz_errors(client, manager):
    assert client.post("/quizzes/q1/submit", json={"answers": [0]}).status_code == 401

    login(client, "u2")
    assert client.post("/quizzes/nope/submit", json={"answers": [0]}).status_code == 404
    assert manager.quiz_attempts == []


def test_quiz_flow_issues_certificate_once(client):
    login(client, "u1")
    _complete_course(client, "c1", ["c1l2", "c1l3"])

    result = client.post("/quizzes/q1/submit", json={"answers": [0, 1, 2]}).json()
    assert result["attempt"]["score"] == 100
    assert result["correct_count"] == 3
    assert result["passed"] is True
    certificate_id = result["certificate_id"]
    assert certificate_id

    again = client.post("/quizzes/q1/submit", json={"answers": [0, 1, 2]}).json()
    assert again["certificate_id"] is None

    dashboard = client.get("/progress/dashboard").json()
    assert [c["certificate"]["id"] for c in dashboard["certificates"]] == [certificate_id]
    entry = next(e for e in dashboard["courses"] if e["course_id"] == "c1")
    assert entry["has_certificate"] is True
    assert dashboard["unread_notifications"] == 1

    notifications = client.get("/notifications/").json()
    assert notifications[0]["link"] == {"page": "certificate", "id": certificate_id}

    read = client.post(f"/notifications/{notifications[0]['id']}/read").json()
    assert read["is_read"] is True
    assert client.get("/notifications/", params={"unread_only": True}).json() == []

    attempts = client.get("/progress/attempts", params={"quiz_id": "q1"}).json()
    assert len(attempts) == 2


def test_failed_quiz_reports_score(client):
    login(client, "u2")
    result = client.post("/quizzes/q1/submit", json={"answers": [0, 1, None]}).json()
    assert result["attempt"]["score"] == 67
    assert result["correct_count"] == 2
    assert result["passed"] is False
    assert result["certificate_id"] is None


def test_certificate_verification(client):
    login(client, "u1")
    _complete_course(client, "c1", ["c1l2", "c1l3"])
    client.post("/quizzes/q1/submit", json={"answers": [0, 1, 2]})

    certificate = client.get("/progress/certificates").json()[0]
    assert certificate["course_title"] == "Introduction to React"

    client.post("/auth/logout")
    verified = client.get("/progress/verify", params={"token": certificate["verification_token"]}).json()
    assert verified["valid"] is True
    assert verified["user_id"] == "u1"
    assert verified["course_id"] == "c1"

    assert client.get("/progress/verify", params={"token": "garbage"}).json() == {
        "valid": False, "certificate_id": None, "user_id": None, "course_id": None, "issue_date": None
    }

    forged = create_certificate_token(
        certificate["certificate"]["id"], "u2", "c1", client.app.state.secret_key
    )
    assert client.get("/progress/verify", params={"token": forged}).json()["valid"] is False


def test_certificate_token_survives_restart(client, store):
    login(client, "u1")
    _complete_course(client, "c1", ["c1l2", "c1l3"])
    client.post("/quizzes/q1/submit", json={"answers": [0, 1, 2]})
    token = client.get("/progress/certificates").json()[0]["verification_token"]

    restarted = TestClient(create_app(store=store))
    assert restarted.app.state.secret_key == client.app.state.secret_key
    assert restarted.get("/progress/verify", params={"token": token}).json()["valid"] is True

    elsewhere = TestClient(create_app(store=MemoryStore()))
    assert elsewhere.get("/progress/verify", params={"token": token}).json()["valid"] is False


def test_builder_is_role_gated(client):
    draft = {"title": "Draft", "category": "Testing"}

    login(client, "u1")
    assert client.post("/admin/courses/", json=draft).status_code == 403

    login(client, "u3")
    response = client.post("/admin/courses/", json=draft)
    assert response.status_code == 201
    assert response.json()["id"].startswith("c")

    assert client.post("/admin/users/", json={"name": "X", "email": "x@edu.com"}).status_code == 403


def test_builder_creates_quiz_and_attaches_it(client):
    login(client, "u5")
    quiz = client.post("/admin/quizzes/", json={
        "title": "Grid Quiz",
        "questions": [{"id": "g1", "text": "Grid?", "options": ["yes", "no"], "correct_answer_index": 0}]
    }).json()

    course = client.post("/admin/courses/", json={
        "title": "CSS Grid", "category": "Web Design", "instructor_ids": ["u5"],
        "lessons": [{"id": "g-l1", "title": "Intro", "type": "TEXT", "content": "Grid"}]
    }).json()

    updated = client.put(f"/admin/courses/{course['id']}", json={
        **{k: v for k, v in course.items() if k != "id"},
        "quiz_id": quiz["id"]
    })
    assert updated.status_code == 200
    assert updated.json()["quiz_id"] == quiz["id"]

    # A quiz attaches to at most one course
    clash = client.put("/admin/courses/c3", json={"title": "HTML5", "quiz_id": quiz["id"]})
    assert clash.status_code == 400

    assert client.put("/admin/courses/missing", json={"title": "X"}).status_code == 404


def test_builder_rejects_unknown_references(client):
    login(client, "u4")
    assert client.post("/admin/courses/", json={"title": "X", "quiz_id": "nope"}).status_code == 400
    assert client.post("/admin/courses/", json={"title": "X", "prerequisite_course_id": "nope"}).status_code == 400
    assert client.post("/admin/courses/", json={"title": "X", "instructor_ids": ["ghost"]}).status_code == 400
    assert client.post("/admin/quizzes/", json={
        "title": "Bad", "questions": [{"id": "b", "text": "?", "options": ["a"], "correct_answer_index": 3}]
    }).status_code == 422


def test_admin_rejects_duplicate_email(client):
    login(client, "u4")
    assert client.post("/admin/users/", json={"name": "Alice", "email": "ALICE@edu.com"}).status_code == 400


def test_navigation_is_role_gated(client):
    login(client, "u1")
    state = client.get("/navigation").json()
    assert state["current"] == {"page": "dashboard"}
    assert [link["view"]["page"] for link in state["links"]] == ["dashboard", "catalog"]

    assert client.post("/navigation", json={"view": {"page": "admin"}}).status_code == 403
    moved = client.post("/navigation", json={"view": {"page": "course", "id": "c1"}}).json()
    assert moved["current"] == {"page": "course", "id": "c1"}

    login(client, "u4")
    assert client.get("/navigation").json()["current"] == {"page": "dashboard"}
    assert client.post("/navigation", json={"view": {"page": "admin"}}).status_code == 200


def test_state_projection(client):
    state = client.get("/state").json()
    assert set(state) == {
        "users", "courses", "quizzes", "enrollments", "reviews",
        "notifications", "certificates", "current_user"
    }
    assert state["current_user"] is None
    assert len(state["courses"]) == 3
