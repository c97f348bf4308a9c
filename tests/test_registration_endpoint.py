"""Test the home page and registration submission endpoint"""

import logging
import time
import uuid

import pytest
from fastapi.testclient import TestClient

from regdesk.context import AppContext
from regdesk.main import create_app
from regdesk.templating import load_templates

logger = logging.getLogger(__name__)


class TestRegistrationSubmission:
    """Test submitting the registration form"""

    def test_valid_submission_inserts_row(self, client, app_context, fetch_registrations):
        """Test that name and phone create one row and render the confirmation"""
        before = int(time.time())
        response = client.post("/", data={"name": "Alice", "phone": "555-1234"})
        after = int(time.time())

        logger.info(f"Response status: {response.status_code}")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert response.text == app_context.templates["registration"].render({})

        registrations = fetch_registrations()
        assert len(registrations) == 1
        registration = registrations[0]
        assert registration.name == "Alice"
        assert registration.phone == "555-1234"
        assert uuid.UUID(registration.id)
        assert before - 2 <= registration.created_on <= after + 2

    @pytest.mark.parametrize(
        "form_data",
        [
            {"name": "", "phone": "555-1234"},
            {"name": "Alice", "phone": ""},
            {"name": "", "phone": ""},
            {"phone": "555-1234"},
            {},
        ],
    )
    def test_missing_field_renders_home(
        self, client, app_context, fetch_registrations, form_data
    ):
        """Test that an incomplete submission stores nothing and shows the form"""
        response = client.post("/", data=form_data)

        assert response.status_code == 200
        assert response.text == app_context.templates["home"].render({})
        assert fetch_registrations() == []

    def test_identical_submissions_create_two_rows(self, client, fetch_registrations):
        """Test that repeated submissions are stored separately with distinct ids"""
        for _ in range(2):
            response = client.post("/", data={"name": "Bob", "phone": "555-0000"})
            assert response.status_code == 200

        registrations = fetch_registrations()
        assert len(registrations) == 2
        assert registrations[0].id != registrations[1].id

    def test_query_string_submission(self, client, fetch_registrations):
        """Test that fields in the query string are accepted"""
        response = client.get("/", params={"name": "Carol", "phone": "555-9999"})

        assert response.status_code == 200
        registrations = fetch_registrations()
        assert [r.name for r in registrations] == ["Carol"]

    def test_body_takes_precedence_over_query(self, client, fetch_registrations):
        """Test that a body value wins over the same field in the query string"""
        response = client.post(
            "/?name=FromQuery", data={"name": "FromBody", "phone": "555-1111"}
        )

        assert response.status_code == 200
        assert [r.name for r in fetch_registrations()] == ["FromBody"]

    @pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
    def test_any_method_is_handled(self, client, fetch_registrations, method):
        """Test that the root route answers every method"""
        response = client.request(
            method, "/", params={"name": "Dan", "phone": "555-2222"}
        )

        assert response.status_code == 200
        assert len(fetch_registrations()) == 1

    def test_non_standard_method_is_handled(self, client, fetch_registrations):
        """Test that methods outside the usual set still reach the root handler"""
        response = client.request(
            "PROPFIND", "/", params={"name": "Gus", "phone": "555-5555"}
        )

        assert response.status_code == 200
        assert [r.name for r in fetch_registrations()] == ["Gus"]

    def test_repeated_field_uses_first_value(self, client, fetch_registrations):
        """Test that the first of several values for a field is used"""
        response = client.get("/?name=first&name=second&phone=1")

        assert response.status_code == 200
        assert [r.name for r in fetch_registrations()] == ["first"]

    def test_repeated_body_field_uses_first_value(self, client, fetch_registrations):
        """Test that the first body value wins when a field repeats in the body"""
        response = client.post(
            "/",
            content=b"name=first&name=second&phone=1",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 200
        assert [r.name for r in fetch_registrations()] == ["first"]


class TestHomePage:
    """Test serving the empty form"""

    def test_get_home(self, client, app_context):
        """Test that GET / renders the home template"""
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == app_context.templates["home"].render({})
        assert 'name="name"' in response.text
        assert 'name="phone"' in response.text


class TestRegistrationErrors:
    """Test error responses of the registration endpoint"""

    def test_unparsable_form_returns_400(self, client, fetch_registrations):
        """Test that a malformed multipart body fails only the request"""
        response = client.post(
            "/",
            content=b"garbage",
            headers={"Content-Type": "multipart/form-data"},
        )

        assert response.status_code == 400
        assert fetch_registrations() == []

        # The server keeps serving afterwards
        assert client.get("/").status_code == 200

    def test_insert_failure_returns_500(self, client, app_context):
        """Test that a failed insert yields a 500 instead of an empty response"""
        with app_context.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE registration")

        response = client.post("/", data={"name": "Eve", "phone": "555-3333"})

        assert response.status_code == 500
        assert response.text == "Internal Server Error"

    def test_render_failure_returns_500(self, tmp_path, app_context):
        """Test that a template failing at render time yields a 500"""
        template_dir = tmp_path / "templates"
        template_dir.mkdir()
        (template_dir / "index.html").write_text("{{ missing.attribute }}")
        (template_dir / "registration.html").write_text("ok")

        broken_context = AppContext(
            engine=app_context.engine,
            templates=load_templates(str(template_dir)),
            static_dir=app_context.static_dir,
            graceful_timeout=app_context.graceful_timeout,
        )

        with TestClient(create_app(broken_context)) as client:
            response = client.get("/")
            assert response.status_code == 500
            assert response.text == "Internal Server Error"

            response = client.post("/", data={"name": "Fay", "phone": "555-4444"})
            assert response.status_code == 200
            assert response.text == "ok"
