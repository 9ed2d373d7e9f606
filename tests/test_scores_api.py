def payload(course_info, assignment_group, learner_submissions):
    return {
        "course": course_info,
        "assignment_group": assignment_group,
        "submissions": learner_submissions,
    }


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_scores_flat_rows(client, course_info, assignment_group, learner_submissions):
    r = client.post("/scores", json=payload(course_info, assignment_group, learner_submissions))
    assert r.status_code == 200, r.text

    rows = r.json()
    assert [row["id"] for row in rows] == [101, 102, 103]

    # assignment ids become sibling keys of id/avg
    first = rows[0]
    assert set(first) == {"id", "avg", "1", "2"}
    assert abs(first["1"] - 0.9) < 1e-9
    assert abs(first["avg"] - 250 / 300) < 1e-9


def test_scores_nested_rows(client, course_info, assignment_group, learner_submissions):
    r = client.post(
        "/scores",
        params={"flat": "false"},
        json=payload(course_info, assignment_group, learner_submissions),
    )
    assert r.status_code == 200, r.text

    row = r.json()[2]
    assert row["id"] == 103
    assert set(row) == {"id", "avg", "scores"}
    assert abs(row["scores"]["2"] - 0.75) < 1e-9


def test_as_of_pins_the_clock(client, course_info, assignment_group, learner_submissions):
    r = client.post(
        "/scores",
        params={"as_of": "2023-10-05T00:00:00Z"},
        json=payload(course_info, assignment_group, learner_submissions),
    )
    assert r.status_code == 200, r.text
    assert [row["id"] for row in r.json()] == [101, 102]


def test_group_mismatch_is_400(client, course_info, assignment_group, learner_submissions):
    assignment_group["course_id"] = 2

    r = client.post("/scores", json=payload(course_info, assignment_group, learner_submissions))
    assert r.status_code == 400
    assert "course" in r.json()["detail"]


def test_invalid_assignment_is_422_with_id(client, course_info, assignment_group, learner_submissions):
    assignment_group["assignments"][1]["points_possible"] = -1

    r = client.post("/scores", json=payload(course_info, assignment_group, learner_submissions))
    assert r.status_code == 422
    assert r.json()["detail"]["assignment_id"] == 2


def test_malformed_submission_does_not_fail_request(client, course_info, assignment_group, learner_submissions):
    learner_submissions.append({"learner_id": 104, "assignment_id": 1})

    r = client.post("/scores", json=payload(course_info, assignment_group, learner_submissions))
    assert r.status_code == 200
    assert 104 not in [row["id"] for row in r.json()]


def test_body_without_course_is_rejected(client, assignment_group, learner_submissions):
    r = client.post(
        "/scores",
        json={"assignment_group": assignment_group, "submissions": learner_submissions},
    )
    assert r.status_code == 422
