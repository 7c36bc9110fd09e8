"""Tests for the HTTP API."""

import sqlite3
from datetime import date

import pytest


def create_user(client, username="bob") -> int:
    response = client.post("/api/users", json={"username": username})
    assert response.status_code == 201
    return response.json()["response"]["_id"]


def log_exercise(client, user_id, **body):
    return client.post(f"/api/users/{user_id}/exercises", json=body)


class TestExampleFlow:
    """The documented request sequence."""

    def test_create_log_and_read_back(self, client):
        """Test creating a user, logging an exercise and reading the log."""
        response = client.post("/api/users", json={"username": "bob"})
        assert response.status_code == 201
        assert response.json() == {
            "message": "User created",
            "response": {"_id": 1, "username": "bob"},
        }

        response = log_exercise(
            client, 1, description="run", duration=30, date="2023-01-01"
        )
        assert response.status_code == 201
        assert response.json() == {
            "userId": 1,
            "exerciseId": 1,
            "description": "run",
            "duration": 30,
            "date": "2023-01-01",
        }

        response = client.get("/api/users/1/logs")
        assert response.status_code == 200
        assert response.json() == {
            "userId": 1,
            "username": "bob",
            "count": 1,
            "logs": [{"description": "run", "duration": 30, "date": "2023-01-01"}],
        }


class TestUsers:
    """Tests for the user endpoints."""

    def test_username_is_trimmed(self, client):
        """Test that surrounding whitespace is stripped."""
        response = client.post("/api/users", json={"username": "  alice  "})
        assert response.status_code == 201
        assert response.json()["response"]["username"] == "alice"

    @pytest.mark.parametrize("body", [{}, {"username": ""}, {"username": "   "}, {"username": 5}])
    def test_username_required(self, client, body):
        """Test that a missing or blank username is rejected."""
        response = client.post("/api/users", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Username is required"}

    def test_duplicate_username(self, client):
        """Test that the second creation of a username fails."""
        assert client.post("/api/users", json={"username": "bob"}).status_code == 201

        response = client.post("/api/users", json={"username": " bob "})
        assert response.status_code == 400
        assert response.json() == {"error": "Username already exists"}

        names = [u["username"] for u in client.get("/api/users").json()["response"]]
        assert names.count("bob") == 1

    def test_list_users(self, client):
        """Test listing users in creation order."""
        create_user(client, "bob")
        create_user(client, "alice")

        response = client.get("/api/users")
        assert response.status_code == 200
        assert response.json() == {
            "message": "Success",
            "response": [
                {"id": 1, "username": "bob"},
                {"id": 2, "username": "alice"},
            ],
        }

    def test_form_encoded_body(self, client):
        """Test that the HTML form encoding is accepted."""
        response = client.post("/api/users", data={"username": "carol"})
        assert response.status_code == 201
        assert response.json()["response"]["username"] == "carol"

    def test_malformed_json(self, client):
        """Test that an unparseable body is a client error."""
        response = client.post(
            "/api/users",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}


class TestLogExercise:
    """Tests for POST /api/users/{id}/exercises."""

    def test_date_defaults_to_today(self, client):
        """Test that an omitted date is today's."""
        user_id = create_user(client)
        response = log_exercise(client, user_id, description="walk", duration=15)
        assert response.status_code == 201
        assert response.json()["date"] == date.today().isoformat()

    def test_description_is_trimmed(self, client):
        """Test that the stored description is trimmed."""
        user_id = create_user(client)
        response = log_exercise(
            client, user_id, description="  row  ", duration=10, date="2023-02-01"
        )
        assert response.json()["description"] == "row"

    def test_unknown_user(self, client, temp_db_path):
        """Test that logging for a missing user is a 404 and writes nothing."""
        response = log_exercise(
            client, 99, description="run", duration=30, date="2023-01-01"
        )
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

        with sqlite3.connect(temp_db_path) as db:
            assert db.execute("SELECT COUNT(*) FROM exercise").fetchone()[0] == 0

    def test_non_numeric_user_id(self, client):
        """Test that a malformed ID never matches a user."""
        response = log_exercise(
            client, "abc", description="run", duration=30, date="2023-01-01"
        )
        assert response.status_code == 404

    def test_first_failure_is_reported(self, client):
        """Test that description is checked before duration and date."""
        user_id = create_user(client)
        response = log_exercise(client, user_id, description="", duration=0, date="bad")
        assert response.status_code == 400
        assert response.json() == {
            "error": "Description is required and must be a non-empty string"
        }

        response = log_exercise(client, user_id, description="run", duration=-1, date="bad")
        assert response.json() == {
            "error": "Duration is required and must be a positive integer"
        }

        response = log_exercise(client, user_id, description="run", duration=5, date="bad")
        assert response.json() == {"error": "Date must be in YYYY-MM-DD format"}

        response = log_exercise(
            client, user_id, description="run", duration=5, date="2023-02-30"
        )
        assert response.json() == {
            "error": "Invalid date, must be a valid date in YYYY-MM-DD format"
        }

    def test_validation_precedes_user_lookup(self, client):
        """Test that a bad body is rejected even for a missing user."""
        response = log_exercise(client, 99, description="run", duration="x")
        assert response.status_code == 400

    def test_duration_beyond_64_bits(self, client):
        """Test that a huge integer duration is stored and read back."""
        user_id = create_user(client)
        response = log_exercise(
            client, user_id, description="run", duration=10**20, date="2023-01-01"
        )
        assert response.status_code == 201
        assert response.json()["duration"] == 1e20

        logs = client.get(f"/api/users/{user_id}/logs").json()["logs"]
        assert logs == [{"description": "run", "duration": 1e20, "date": "2023-01-01"}]

    def test_fractional_duration(self, client):
        """Test that non-integral durations are accepted."""
        user_id = create_user(client)
        response = log_exercise(
            client, user_id, description="stretch", duration=2.5, date="2023-01-01"
        )
        assert response.status_code == 201
        assert response.json()["duration"] == 2.5

    def test_form_encoded_body(self, client):
        """Test the HTML form submission."""
        user_id = create_user(client)
        response = client.post(
            f"/api/users/{user_id}/exercises",
            data={"description": "cycle", "duration": "40", "date": "2023-06-01"},
        )
        assert response.status_code == 201
        assert response.json()["duration"] == 40


class TestListLogs:
    """Tests for GET /api/users/{id}/logs."""

    @pytest.fixture
    def user_with_logs(self, client):
        user_id = create_user(client)
        for day in ["2023-01-05", "2023-01-01", "2023-01-03", "2023-01-02", "2023-01-04"]:
            response = log_exercise(
                client, user_id, description=f"run {day}", duration=30, date=day
            )
            assert response.status_code == 201
        return user_id

    def test_sorted_ascending(self, client, user_with_logs):
        """Test that entries come back oldest first."""
        body = client.get(f"/api/users/{user_with_logs}/logs").json()
        assert body["count"] == 5
        assert [log["date"] for log in body["logs"]] == [
            "2023-01-01", "2023-01-02", "2023-01-03", "2023-01-04", "2023-01-05",
        ]

    def test_inclusive_bounds(self, client, user_with_logs):
        """Test that from and to are both inclusive."""
        body = client.get(
            f"/api/users/{user_with_logs}/logs",
            params={"from": "2023-01-02", "to": "2023-01-04"},
        ).json()
        assert [log["date"] for log in body["logs"]] == [
            "2023-01-02", "2023-01-03", "2023-01-04",
        ]

    def test_single_bound(self, client, user_with_logs):
        """Test filtering with only one bound."""
        body = client.get(
            f"/api/users/{user_with_logs}/logs", params={"from": "2023-01-04"}
        ).json()
        assert body["count"] == 2

        body = client.get(
            f"/api/users/{user_with_logs}/logs", params={"to": "2023-01-01", "from": ""}
        ).json()
        assert body["count"] == 1

    def test_limit_takes_earliest(self, client, user_with_logs):
        """Test that the limit keeps the earliest entries."""
        body = client.get(
            f"/api/users/{user_with_logs}/logs", params={"limit": "2"}
        ).json()
        assert [log["date"] for log in body["logs"]] == ["2023-01-01", "2023-01-02"]

    @pytest.mark.parametrize("limit", ["0", "1001", "-3", "many"])
    def test_limit_out_of_range(self, client, user_with_logs, limit):
        """Test rejected limits."""
        response = client.get(
            f"/api/users/{user_with_logs}/logs", params={"limit": limit}
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "Limit must be a positive integer and no more than 1000"
        }

    def test_limit_caps_at_1000(self, client, temp_db_path):
        """Test that the maximum limit is accepted and enforced."""
        user_id = create_user(client)
        with sqlite3.connect(temp_db_path) as db:
            db.executemany(
                "INSERT INTO exercise (userId, description, duration, date) VALUES (?, ?, ?, ?)",
                [(user_id, "lap", 1, "2023-01-01")] * 1001,
            )

        response = client.get(f"/api/users/{user_id}/logs", params={"limit": "1000"})
        assert response.status_code == 200
        assert response.json()["count"] == 1000

        response = client.get(f"/api/users/{user_id}/logs")
        assert response.json()["count"] == 100

    def test_from_error_masks_to_error(self, client, user_with_logs):
        """Test that only the from error is reported when both are invalid."""
        response = client.get(
            f"/api/users/{user_with_logs}/logs",
            params={"from": "2023-02-31", "to": "junk", "limit": "0"},
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid date, must be a valid date in YYYY-MM-DD format"
        }

    def test_to_error_reported_when_from_valid(self, client, user_with_logs):
        """Test that a to error surfaces once from passes."""
        response = client.get(
            f"/api/users/{user_with_logs}/logs",
            params={"from": "2023-01-01", "to": "junk"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Date must be in YYYY-MM-DD format"}

    def test_unknown_user(self, client):
        """Test that logs for a missing user are a 404."""
        response = client.get("/api/users/42/logs")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_id_beyond_integer_range(self, client):
        """Test that an ID too large for SQLite matches no user."""
        create_user(client)
        response = client.get("/api/users/99999999999999999999/logs")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    @pytest.mark.parametrize("raw_id", ["1_0", "+10", "%2010", "١٠", "10.0"])
    def test_non_canonical_id(self, client, raw_id):
        """Test that only plain ASCII digits address a user."""
        for n in range(10):
            create_user(client, f"u{n}")
        assert client.get("/api/users/10/logs").status_code == 200

        response = client.get(f"/api/users/{raw_id}/logs")
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_empty_log(self, client):
        """Test a user with no exercises."""
        user_id = create_user(client)
        body = client.get(f"/api/users/{user_id}/logs").json()
        assert body == {"userId": user_id, "username": "bob", "count": 0, "logs": []}


class TestApp:
    """Tests for the non-API routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_index_page(self, client):
        """Test that the index page renders the forms."""
        response = client.get("/")
        assert response.status_code == 200
        assert "/api/users" in response.text


class TestStoreFailures:
    """Tests for storage errors reaching the client."""

    def test_missing_table_is_generic_500(self, client, temp_db_path):
        """Test that a broken store yields a generic error body."""
        with sqlite3.connect(temp_db_path) as db:
            db.execute("DROP TABLE exercise")
            db.execute("DROP TABLE users")

        response = client.get("/api/users")
        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}

        response = client.post("/api/users", json={"username": "bob"})
        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}
