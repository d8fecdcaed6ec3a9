QUESTIONS = [
    {"question": "Past tense of 'go'", "correctAnswer": "went", "wrongAnswers": ["goed", "gone", "goes"]},
    {"question": "Plural of 'child'", "correctAnswer": "children", "wrongAnswers": ["childs", "childes"]},
]


def import_set(client, user_id, questions=QUESTIONS, title="Unit 1"):
    body = {"userId": user_id, "questions": questions}
    if title is not None:
        body["title"] = title
    return client.post("/api/quiz-sets/import-json", json=body)


def test_import_then_list_questions_in_order(client, user_id):
    r = import_set(client, user_id)
    assert r.status_code == 201
    body = r.json()
    assert body["quizSet"]["title"] == "Unit 1"
    assert body["imported"] == 2
    assert body["skipped"] == 0

    r = client.get(f"/api/quiz-sets/{body['quizSet']['id']}/questions")
    assert r.status_code == 200
    questions = r.json()["questions"]
    assert len(questions) == 2
    assert questions[0]["id"] < questions[1]["id"]
    assert questions[0]["question"] == "Past tense of 'go'"
    assert questions[0]["correctAnswer"] == "went"
    assert questions[0]["wrongAnswers"] == ["goed", "gone", "goes"]
    assert questions[1]["correctAnswer"] == "children"
    assert "correct_answer" not in questions[0]


def test_import_skips_malformed_entries(client, user_id):
    entries = [
        QUESTIONS[0],
        {"question": "", "correctAnswer": "x", "wrongAnswers": []},
        "not an object",
        {"question": "No wrong answers", "correctAnswer": "x"},
        {"question": "Bad wrong answers", "correctAnswer": "x", "wrongAnswers": "a,b"},
        QUESTIONS[1],
    ]
    r = import_set(client, user_id, questions=entries)
    assert r.status_code == 201
    assert r.json()["imported"] == 2
    assert r.json()["skipped"] == 4

    qs = client.get(f"/api/quiz-sets/{r.json()['quizSet']['id']}/questions").json()["questions"]
    assert [q["question"] for q in qs] == ["Past tense of 'go'", "Plural of 'child'"]


def test_import_all_malformed_still_succeeds(client, user_id):
    r = import_set(client, user_id, questions=[{"foo": "bar"}])
    assert r.status_code == 201
    assert r.json()["imported"] == 0
    assert r.json()["skipped"] == 1


def test_import_default_title(client, user_id):
    r = import_set(client, user_id, title=None)
    assert r.status_code == 201
    assert r.json()["quizSet"]["title"] == "Imported Quiz"


def test_import_requires_user_and_questions(client, user_id):
    for body in (
        {"questions": QUESTIONS},
        {"userId": user_id},
        {"userId": user_id, "questions": []},
        {"userId": user_id, "questions": "nope"},
    ):
        r = client.post("/api/quiz-sets/import-json", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "userId and non-empty questions[] are required"}


def test_list_quiz_sets_newest_first(client, user_id):
    first = import_set(client, user_id, title="first").json()["quizSet"]
    second = import_set(client, user_id, title="second").json()["quizSet"]

    r = client.get("/api/quiz-sets", params={"userId": user_id})
    assert r.status_code == 200
    sets = r.json()["quizSets"]
    assert [s["id"] for s in sets] == [second["id"], first["id"]]
    assert set(sets[0]) == {"id", "title", "created_at"}


def test_list_quiz_sets_scoped_to_user(client, user_id):
    import_set(client, user_id)
    other = client.post("/api/register", json={"email": "other@example.com", "password": "pw"}).json()["user"]["id"]

    r = client.get("/api/quiz-sets", params={"userId": other})
    assert r.json() == {"quizSets": []}


def test_list_quiz_sets_requires_user_id(client):
    r = client.get("/api/quiz-sets")
    assert r.status_code == 400
    assert r.json() == {"error": "userId is required"}


def test_get_quiz_set(client, user_id):
    created = import_set(client, user_id).json()["quizSet"]
    r = client.get(f"/api/quiz-sets/{created['id']}")
    assert r.status_code == 200
    assert r.json()["quizSet"] == created

    assert client.get("/api/quiz-sets/9999").status_code == 404


def test_rename_quiz_set(client, user_id):
    created = import_set(client, user_id).json()["quizSet"]

    r = client.put(f"/api/quiz-sets/{created['id']}", json={"title": "Renamed"})
    assert r.status_code == 204
    assert r.content == b""

    sets = client.get("/api/quiz-sets", params={"userId": user_id}).json()["quizSets"]
    assert sets[0]["title"] == "Renamed"


def test_rename_requires_title(client, user_id):
    created = import_set(client, user_id).json()["quizSet"]
    r = client.put(f"/api/quiz-sets/{created['id']}", json={})
    assert r.status_code == 400
    assert r.json() == {"error": "Title is required"}


def test_delete_quiz_set_removes_questions(client, user_id):
    created = import_set(client, user_id).json()["quizSet"]

    r = client.delete(f"/api/quiz-sets/{created['id']}")
    assert r.status_code == 204

    assert client.get("/api/quiz-sets", params={"userId": user_id}).json() == {"quizSets": []}
    assert client.get(f"/api/quiz-sets/{created['id']}/questions").json() == {"questions": []}


def test_update_and_delete_unknown_quiz_set_are_noops(client):
    assert client.put("/api/quiz-sets/4242", json={"title": "x"}).status_code == 204
    assert client.delete("/api/quiz-sets/4242").status_code == 204


def test_import_for_unknown_user_fails_without_rows(client, count_rows):
    r = import_set(client, 99999)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
    assert count_rows("quiz_sets") == 0
    assert count_rows("questions") == 0


def test_import_rolls_back_when_question_insert_fails(client, user_id, run_sql, count_rows):
    run_sql(
        "CREATE TRIGGER reject_boom BEFORE INSERT ON questions "
        "WHEN NEW.question = 'boom' BEGIN SELECT RAISE(ABORT, 'rejected'); END"
    )
    entries = [QUESTIONS[0], {"question": "boom", "correctAnswer": "x", "wrongAnswers": []}, QUESTIONS[1]]

    r = import_set(client, user_id, questions=entries)
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
    assert count_rows("quiz_sets") == 0
    assert count_rows("questions") == 0


def test_list_quiz_sets_accepts_zero_user_id(client):
    r = client.get("/api/quiz-sets", params={"userId": 0})
    assert r.status_code == 200
    assert r.json() == {"quizSets": []}


def test_quiz_set_created_at_is_utc(client, user_id):
    created = import_set(client, user_id).json()["quizSet"]
    assert created["created_at"].endswith("Z") or created["created_at"].endswith("+00:00")
