from fastapi.testclient import TestClient

from tests.integration.utils import HCP, RESEARCHER


class TestProjects:
    def test_project_crud(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/projects", json={"title": "Telehealth for T2D"}, headers=HCP
        )
        assert response.status_code == 201
        project = response.json()
        assert project["current_stage"] == "Idea Generation & Validation"
        assert project["hcp_id"] == "user_hcp_1"

        response = test_client.get(f"/projects/{project['id']}", headers=RESEARCHER)
        assert response.status_code == 200
        assert response.json()["title"] == "Telehealth for T2D"

        response = test_client.get("/projects", headers=HCP)
        assert [p["id"] for p in response.json()] == [project["id"]]

        response = test_client.delete(f"/projects/{project['id']}", headers=HCP)
        assert response.status_code == 204

        response = test_client.get(f"/projects/{project['id']}", headers=HCP)
        assert response.status_code == 404

    def test_create_project_role_gated(self, test_client: TestClient) -> None:
        response = test_client.post("/projects", json={"title": "T"}, headers=RESEARCHER)
        assert response.status_code == 403

    def test_unknown_user(self, test_client: TestClient) -> None:
        response = test_client.get("/projects", headers={"x-user-id": "nobody"})
        assert response.status_code == 401

    def test_blank_title(self, test_client: TestClient) -> None:
        response = test_client.post("/projects", json={"title": "  "}, headers=HCP)
        assert response.status_code == 400

    def test_assign_expert(self, test_client: TestClient) -> None:
        project = test_client.post(
            "/projects", json={"title": "T"}, headers=HCP
        ).json()

        response = test_client.post(
            f"/projects/{project['id']}/experts",
            json={"role": "researcher", "user_id": "user_researcher_1"},
            headers=HCP,
        )
        assert response.status_code == 200
        assert response.json()["assigned_researcher"] == "user_researcher_1"

    def test_validation_error(self, test_client: TestClient) -> None:
        response = test_client.post("/projects", json={}, headers=HCP)
        assert response.status_code == 422
        assert response.json()["errors"][0]["loc"] == "body.title"

    def test_list_users(self, test_client: TestClient) -> None:
        response = test_client.get("/users")
        assert len(response.json()) == 5

        response = test_client.get("/users/me", headers=RESEARCHER)
        assert response.json()["role"] == "Experienced Researcher"
