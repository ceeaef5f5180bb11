from fastapi.testclient import TestClient
from liftlog.main import app
from conftest import auth_headers

client = TestClient(app)

def make_routine(headers, name="Push A", description=None):
    r = client.post("/routines", headers=headers, json={"name": name, "description": description})
    assert r.status_code == 201, r.text
    return r.json()

def add_template(headers, routine_id, exercise_id, sets):
    r = client.post(f"/routines/{routine_id}/exercises", headers=headers,
                    json={"exercise_id": exercise_id, "sets": sets})
    assert r.status_code == 201, r.text
    return r.json()

def test_create_and_list(headers):
    created = make_routine(headers, "Legs", "squat focus")
    assert created["name"] == "Legs"
    assert created["exercises"] == []

    listed = client.get("/routines", headers=headers).json()
    assert [r["id"] for r in listed] == [created["id"]]

def test_blank_name_rejected(headers):
    r = client.post("/routines", headers=headers, json={"name": "  "})
    assert r.status_code == 422

def test_update_keeps_name_when_omitted(headers):
    routine = make_routine(headers, "Pull")
    r = client.patch(f"/routines/{routine['id']}", headers=headers, json={"description": "rows + deadlifts"})
    assert r.status_code == 200
    assert r.json()["name"] == "Pull"
    assert r.json()["description"] == "rows + deadlifts"

    r = client.patch(f"/routines/{routine['id']}", headers=headers, json={"name": "Pull B"})
    assert r.json()["name"] == "Pull B"

def test_templates_order_and_sets(headers, exercise_ids):
    routine = make_routine(headers)
    bench = add_template(headers, routine["id"], exercise_ids["Bench Press"], [{"weight": 60, "reps": 10}] * 3)
    incline = add_template(headers, routine["id"], exercise_ids["Incline Dumbbell Press"], [{"weight": 24, "reps": 12}])

    assert (bench["order_num"], incline["order_num"]) == (1, 2)
    assert [s["set_number"] for s in bench["sets"]] == [1, 2, 3]

    r = client.put(f"/routines/exercises/{bench['id']}/sets", headers=headers, json={"sets": [{"weight": 65, "reps": 8}]})
    assert r.status_code == 200
    assert [(s["set_number"], s["weight"]) for s in r.json()["sets"]] == [(1, 65)]

def test_reorder(headers, exercise_ids):
    routine = make_routine(headers)
    a = add_template(headers, routine["id"], exercise_ids["Squat"], [{"weight": 100, "reps": 5}])
    b = add_template(headers, routine["id"], exercise_ids["Leg Press"], [{"weight": 200, "reps": 10}])
    c = add_template(headers, routine["id"], exercise_ids["Deadlift"], [{"weight": 140, "reps": 3}])

    r = client.put(f"/routines/{routine['id']}/order", headers=headers, json={"ordered_ids": [c["id"], a["id"], b["id"]]})
    assert r.status_code == 200
    assert [e["id"] for e in r.json()["exercises"]] == [c["id"], a["id"], b["id"]]
    assert [e["order_num"] for e in r.json()["exercises"]] == [1, 2, 3]

def test_reorder_needs_ids(headers):
    routine = make_routine(headers)
    r = client.put(f"/routines/{routine['id']}/order", headers=headers, json={"ordered_ids": []})
    assert r.status_code == 422

def test_remove_template_and_delete_routine(headers, exercise_ids):
    routine = make_routine(headers)
    entry = add_template(headers, routine["id"], exercise_ids["Squat"], [{"weight": 100, "reps": 5}])

    assert client.delete(f"/routines/exercises/{entry['id']}", headers=headers).status_code == 204
    assert client.get(f"/routines/{routine['id']}", headers=headers).json()["exercises"] == []

    assert client.delete(f"/routines/{routine['id']}", headers=headers).status_code == 204
    assert client.get(f"/routines/{routine['id']}", headers=headers).status_code == 404

def test_by_exercise(headers, exercise_ids):
    push = make_routine(headers, "Push")
    legs = make_routine(headers, "Legs")
    add_template(headers, push["id"], exercise_ids["Bench Press"], [{"weight": 60, "reps": 10}])
    add_template(headers, legs["id"], exercise_ids["Squat"], [{"weight": 100, "reps": 5}])

    r = client.get(f"/routines/by-exercise/{exercise_ids['Squat']}", headers=headers)
    assert r.status_code == 200
    assert [x["id"] for x in r.json()] == [legs["id"]]

def test_apply_creates_session_and_copies_sets(headers, exercise_ids):
    routine = make_routine(headers)
    add_template(headers, routine["id"], exercise_ids["Bench Press"], [{"weight": 60, "reps": 10}, {"weight": 70, "reps": 8}])
    add_template(headers, routine["id"], exercise_ids["Incline Dumbbell Press"], [{"weight": 24, "reps": 12}])

    r = client.post(f"/routines/{routine['id']}/apply", headers=headers, json={"date": "2024-07-01"})
    assert r.status_code == 200, r.text
    result = r.json()
    assert result["added"] == 2
    assert result["skipped"] == 0

    day = client.get("/sessions/by-date/2024-07-01", headers=headers).json()
    assert day["id"] == result["session_id"]
    bench = day["exercises"][0]
    assert bench["exercise_id"] == exercise_ids["Bench Press"]
    assert [(s["set_number"], s["weight"], s["reps"]) for s in bench["sets"]] == [(1, 60, 10), (2, 70, 8)]

def test_apply_skips_exercises_already_logged(headers, exercise_ids):
    sess = client.put("/sessions/by-date/2024-07-02", headers=headers).json()
    client.post(f"/sessions/{sess['id']}/exercises", headers=headers,
                json={"exercise_id": exercise_ids["Squat"], "sets": [{"weight": 90, "reps": 5}]})

    routine = make_routine(headers, "Legs")
    add_template(headers, routine["id"], exercise_ids["Squat"], [{"weight": 100, "reps": 5}])
    add_template(headers, routine["id"], exercise_ids["Leg Press"], [{"weight": 200, "reps": 10}])

    result = client.post(f"/routines/{routine['id']}/apply", headers=headers, json={"date": "2024-07-02"}).json()
    assert (result["added"], result["skipped"]) == (1, 1)

    day = client.get("/sessions/by-date/2024-07-02", headers=headers).json()
    assert [e["exercise_id"] for e in day["exercises"]] == [exercise_ids["Squat"], exercise_ids["Leg Press"]]
    # the logged squat keeps its own sets and the copy continues the order
    assert day["exercises"][0]["sets"][0]["weight"] == 90
    assert day["exercises"][1]["order_num"] == 2

    # applying twice adds nothing new
    again = client.post(f"/routines/{routine['id']}/apply", headers=headers, json={"date": "2024-07-02"}).json()
    assert (again["added"], again["skipped"]) == (0, 2)

def test_apply_copies_a_repeated_exercise_once(headers, exercise_ids):
    squat = exercise_ids["Squat"]
    routine = make_routine(headers, "Squat twice")
    add_template(headers, routine["id"], squat, [{"weight": 100, "reps": 5}])
    add_template(headers, routine["id"], squat, [{"weight": 80, "reps": 8}])

    result = client.post(f"/routines/{routine['id']}/apply", headers=headers, json={"date": "2024-07-04"}).json()
    assert (result["added"], result["skipped"]) == (1, 1)

    day = client.get("/sessions/by-date/2024-07-04", headers=headers).json()
    assert [e["exercise_id"] for e in day["exercises"]] == [squat]
    # the first listing wins
    assert [(s["weight"], s["reps"]) for s in day["exercises"][0]["sets"]] == [(100, 5)]

def test_routines_are_private(headers, user_id, exercise_ids):
    routine = make_routine(headers)
    entry = add_template(headers, routine["id"], exercise_ids["Squat"], [{"weight": 100, "reps": 5}])
    other = auth_headers(user_id + "-other")

    assert client.get(f"/routines/{routine['id']}", headers=other).status_code == 404
    assert client.post(f"/routines/{routine['id']}/apply", headers=other, json={"date": "2024-07-03"}).status_code == 404
    assert client.delete(f"/routines/exercises/{entry['id']}", headers=other).status_code == 404
    assert client.get("/routines", headers=other).json() == []

def test_add_unknown_exercise_404(headers):
    routine = make_routine(headers)
    r = client.post(f"/routines/{routine['id']}/exercises", headers=headers, json={"exercise_id": 999999, "sets": []})
    assert r.status_code == 404
