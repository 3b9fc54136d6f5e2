import pytest


def create(client, title, category_id=1, parent_id=None, description=""):
    body = {"title": title, "description": description, "category_id": category_id}
    if parent_id is not None:
        body["parent_id"] = parent_id
    response = client.post("/api/tasks", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def listed(client, **params):
    response = client.get("/api/tasks", params=params)
    assert response.status_code == 200
    return response.json()


class TestTasksApi:
    """Tests for the /api/tasks endpoints."""

    def test_list_empty(self, client):
        """Test that a fresh database has no tasks."""
        assert listed(client) == []

    def test_create_returns_full_task(self, client):
        """Test that POST /tasks returns the created record with 201."""
        task = create(client, "Write report", description="Q3 numbers")

        assert task == {
            "id": task["id"],
            "title": "Write report",
            "description": "Q3 numbers",
            "category_id": 1,
            "parent_id": None,
            "order": 0,
            "completed": False,
        }

    def test_description_is_optional(self, client):
        """Test creating a task without a description."""
        response = client.post("/api/tasks", json={"title": "T", "category_id": 1})

        assert response.status_code == 201
        assert response.json()["description"] == ""

    def test_reorder_scenario(self, client):
        """Test A then B, reordered to [B, A], lists as B(0), A(1)."""
        a = create(client, "A")
        b = create(client, "B")
        assert (a["order"], b["order"]) == (0, 1)

        response = client.post(
            "/api/tasks/reorder",
            json={"tasks": [{"id": b["id"], "parent_id": None}, {"id": a["id"], "parent_id": None}]},
        )
        assert response.status_code == 200
        assert response.content == b""

        tasks = listed(client)
        assert [(t["id"], t["order"]) for t in tasks] == [(b["id"], 0), (a["id"], 1)]

    def test_reorder_parent_id_optional(self, client):
        """Test that reorder entries may omit parent_id."""
        parent = create(client, "Parent")
        child = create(client, "Child", parent_id=parent["id"])

        response = client.post("/api/tasks/reorder", json={"tasks": [{"id": child["id"]}]})

        assert response.status_code == 200
        (moved,) = [t for t in listed(client) if t["id"] == child["id"]]
        assert moved["parent_id"] is None

    def test_update_category_scenario(self, client, app_services):
        """Test that moving a parent to another category moves its child too."""
        work = app_services.categories.create("Work")
        parent = create(client, "Parent")
        child = create(client, "Child", parent_id=parent["id"])
        assert child["order"] == 0

        response = client.put(
            f"/api/tasks/{parent['id']}",
            json={"title": "Parent", "description": "", "category_id": work.id},
        )
        assert response.status_code == 200
        assert response.content == b""

        by_id = {t["id"]: t for t in listed(client)}
        assert by_id[parent["id"]]["category_id"] == work.id
        assert by_id[child["id"]]["category_id"] == work.id

    def test_complete_scenario(self, client):
        """Test that a completed task disappears from the listing."""
        task = create(client, "Finish me")

        response = client.post(f"/api/tasks/{task['id']}/complete")

        assert response.status_code == 200
        assert task["id"] not in [t["id"] for t in listed(client)]

    def test_complete_removes_descendants(self, client):
        """Test completing a parent removes its whole subtree."""
        parent = create(client, "Parent")
        child = create(client, "Child", parent_id=parent["id"])
        create(client, "Grandchild", parent_id=child["id"])

        client.post(f"/api/tasks/{parent['id']}/complete")

        assert listed(client) == []

    def test_filter_by_category(self, client, app_services):
        """Test the category_id query parameter."""
        work = app_services.categories.create("Work")
        create(client, "General task")
        w = create(client, "Work task", category_id=work.id)

        tasks = listed(client, category_id=work.id)

        assert [t["id"] for t in tasks] == [w["id"]]

    def test_missing_task_mutations_succeed(self, client):
        """Test that update and complete of an unknown id still return 200."""
        update = client.put(
            "/api/tasks/9999", json={"title": "Ghost", "description": "", "category_id": 1}
        )
        complete = client.post("/api/tasks/9999/complete")

        assert update.status_code == 200
        assert complete.status_code == 200


class TestTasksApiErrors:
    """Tests for request rejection and storage errors."""

    def test_malformed_json_is_400(self, client):
        """Test that an unparseable body is rejected with plain text."""
        response = client.post(
            "/api/tasks",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text

    def test_missing_field_is_400(self, client):
        """Test that a body without a title is rejected."""
        response = client.post("/api/tasks", json={"category_id": 1})

        assert response.status_code == 400
        assert "title" in response.text

    def test_wrong_type_is_400(self, client):
        """Test that a non-integer category_id is rejected."""
        response = client.post(
            "/api/tasks", json={"title": "T", "category_id": "general"}
        )

        assert response.status_code == 400
        assert "category_id" in response.text

    @pytest.mark.parametrize(
        "method, path",
        [
            ("put", "/api/tasks/abc"),
            ("post", "/api/tasks/abc/complete"),
        ],
    )
    def test_non_numeric_id_is_400(self, client, method, path):
        """Test that a non-numeric task id in the path is rejected."""
        body = {"title": "T", "description": "", "category_id": 1}
        if method == "put":
            response = client.put(path, json=body)
        else:
            response = client.post(path)

        assert response.status_code == 400
        assert response.text == "Invalid task ID"

    def test_non_numeric_category_filter_is_400(self, client):
        """Test that a non-numeric category_id query is rejected."""
        response = client.get("/api/tasks", params={"category_id": "x"})

        assert response.status_code == 400

    def test_reorder_without_tasks_is_400(self, client):
        """Test that a reorder body without the tasks list is rejected."""
        response = client.post("/api/tasks/reorder", json={"task_ids": [1, 2]})

        assert response.status_code == 400

    def test_storage_error_is_500(self, client):
        """Test that a foreign key failure surfaces as a plain-text 500."""
        response = client.post("/api/tasks", json={"title": "T", "category_id": 999})

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/plain")
        assert "FOREIGN KEY" in response.text

    def test_failed_reorder_changes_nothing(self, client):
        """Test that a reorder batch with a bad parent is rolled back."""
        a = create(client, "A")
        b = create(client, "B")

        response = client.post(
            "/api/tasks/reorder",
            json={"tasks": [{"id": b["id"]}, {"id": a["id"], "parent_id": 9999}]},
        )

        assert response.status_code == 500
        assert [t["id"] for t in listed(client)] == [a["id"], b["id"]]


class TestTasksApiIdRange:
    """Tests for ids outside SQLite's 64-bit integer range."""

    TOO_BIG = 2**63

    def test_path_id_out_of_range_is_400(self, client):
        """Test that an oversized path id is an invalid id, not a storage error."""
        complete = client.post(f"/api/tasks/{self.TOO_BIG}/complete")
        update = client.put(
            f"/api/tasks/{self.TOO_BIG}",
            json={"title": "T", "description": "", "category_id": 1},
        )

        assert complete.status_code == 400
        assert complete.text == "Invalid task ID"
        assert update.status_code == 400
        assert update.text == "Invalid task ID"

    def test_largest_path_id_is_accepted(self, client):
        """Test that the largest 64-bit id still reaches the store."""
        response = client.post(f"/api/tasks/{self.TOO_BIG - 1}/complete")

        assert response.status_code == 200

    @pytest.mark.parametrize(
        "body, field",
        [
            ({"title": "T", "category_id": TOO_BIG}, "category_id"),
            ({"title": "T", "category_id": 1, "parent_id": -TOO_BIG - 1}, "parent_id"),
        ],
    )
    def test_body_id_out_of_range_is_400(self, client, body, field):
        """Test that oversized ids in a task body are rejected."""
        response = client.post("/api/tasks", json=body)

        assert response.status_code == 400
        assert field in response.text

    def test_reorder_id_out_of_range_is_400(self, client):
        """Test that oversized ids in a reorder body are rejected."""
        response = client.post(
            "/api/tasks/reorder", json={"tasks": [{"id": self.TOO_BIG}]}
        )

        assert response.status_code == 400

    def test_query_id_out_of_range_is_400(self, client):
        """Test that an oversized category filter is rejected."""
        response = client.get("/api/tasks", params={"category_id": str(self.TOO_BIG)})

        assert response.status_code == 400
        assert "category_id" in response.text


class TestTasksApiNullDescription:
    """Tests for clients that send a null description."""

    def test_create_with_null_description(self, client):
        """Test that a null description is stored as an empty string."""
        response = client.post(
            "/api/tasks", json={"title": "T", "description": None, "category_id": 1}
        )

        assert response.status_code == 201
        assert response.json()["description"] == ""

    def test_update_with_null_description(self, client):
        """Test that updating with a null description clears it."""
        task = create(client, "T", description="old")

        response = client.put(
            f"/api/tasks/{task['id']}",
            json={"title": "T", "description": None, "category_id": 1},
        )

        assert response.status_code == 200
        assert listed(client)[0]["description"] == ""
