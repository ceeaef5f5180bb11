from fastapi.testclient import TestClient
from liftlog.main import app
from conftest import auth_headers

client = TestClient(app)

def category_id(headers, slug):
    cats = client.get("/categories", headers=headers).json()
    return next(c["id"] for c in cats if c["slug"] == slug)

def test_categories_in_sort_order(headers):
    r = client.get("/categories", headers=headers)
    assert r.status_code == 200
    slugs = [c["slug"] for c in r.json()]
    assert slugs[:4] == ["chest", "back", "legs", "cardio"]

def test_exercises_filter_by_category(headers):
    legs = category_id(headers, "legs")
    r = client.get("/exercises", headers=headers, params={"category_id": legs})
    assert r.status_code == 200
    names = [e["name"] for e in r.json()]
    assert names == ["Leg Press", "Squat"]

def test_custom_exercise_visible_only_to_author(headers, user_id):
    chest = category_id(headers, "chest")
    r = client.post("/exercises", headers=headers, json={"category_id": chest, "name": "  Cable Fly "})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["name"] == "Cable Fly"
    assert body["is_custom"] is True

    mine = [e["id"] for e in client.get("/exercises", headers=headers).json()]
    assert body["id"] in mine

    other = auth_headers(user_id + "-other")
    theirs = [e["id"] for e in client.get("/exercises", headers=other).json()]
    assert body["id"] not in theirs

def test_custom_exercise_blank_name_422(headers):
    chest = category_id(headers, "chest")
    r = client.post("/exercises", headers=headers, json={"category_id": chest, "name": "   "})
    assert r.status_code == 422
    assert r.json()["message"] == "Validation Error"

def test_custom_exercise_unknown_category_404(headers):
    r = client.post("/exercises", headers=headers, json={"category_id": 999999, "name": "Ghost"})
    assert r.status_code == 404
