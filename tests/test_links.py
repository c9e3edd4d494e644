"""Link API tests."""

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from linkshelf.api.dependencies import get_link_repository
from linkshelf.main import app
from linkshelf.models.link import Link
from linkshelf.services.link_repository import LinkRepository


def test_create_and_get_link(client, auth_headers):
    """A created link reads back with the same fields and server timestamps."""
    body = {
        "userId": auth_headers.user_id,
        "url": "https://github.com/fastapi/fastapi",
        "title": "FastAPI",
        "description": "Web framework",
        "tags": ["python", "web"],
        "category": "Tools",
        "linkType": "github",
    }
    response = client.post("/links", headers=auth_headers, json=body)
    assert response.status_code == 201
    link_id = response.json()["id"]

    response = client.get(f"/links/{link_id}", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == link_id
    for key, value in body.items():
        assert data[key] == value
    created = datetime.fromisoformat(data["createdAt"])
    updated = datetime.fromisoformat(data["updatedAt"])
    assert updated >= created


def test_create_link_defaults(client, auth_headers):
    """Optional fields default to empty values and the type is detected."""
    response = client.post(
        "/links",
        headers=auth_headers,
        json={
            "url": "https://www.python.org/",
            "title": "Python",
            "userId": auth_headers.user_id,
        },
    )
    assert response.status_code == 201

    data = client.get(f"/links/{response.json()['id']}", headers=auth_headers).json()
    assert data["userId"] == auth_headers.user_id
    assert data["description"] == ""
    assert data["tags"] == []
    assert data["category"] == ""
    assert data["linkType"] == "website"


def test_create_link_detects_twitter(client, auth_headers):
    """Omitting linkType stores the classified type."""
    response = client.post(
        "/links",
        headers=auth_headers,
        json={"url": "https://twitter.com/x", "title": "t", "userId": auth_headers.user_id},
    )
    assert response.status_code == 201

    data = client.get(f"/links/{response.json()['id']}", headers=auth_headers).json()
    assert data["linkType"] == "twitter"


def test_create_link_keeps_explicit_type(client, auth_headers, create_link):
    """An explicit linkType wins over detection."""
    link_id = create_link(auth_headers, url="https://youtube.com/watch?v=1", linkType="other")

    data = client.get(f"/links/{link_id}", headers=auth_headers).json()
    assert data["linkType"] == "other"


def test_create_link_cleans_tags(client, auth_headers, create_link):
    """Tags are trimmed, blanks dropped and repeats removed."""
    link_id = create_link(auth_headers, tags=[" dev ", "dev", "", "tools"])

    data = client.get(f"/links/{link_id}", headers=auth_headers).json()
    assert data["tags"] == ["dev", "tools"]


@pytest.mark.parametrize(
    "body",
    [
        {"url": "https://example.com"},
        {"title": "No URL"},
        {"url": "", "title": "Empty URL"},
        {"url": "https://example.com", "title": "   "},
    ],
)
def test_create_link_requires_url_and_title(client, auth_headers, body):
    """Missing url or title is a bad request."""
    response = client.post("/links", headers=auth_headers, json=body)
    assert response.status_code == 400
    assert response.json()["detail"] == "URL and title are required"


def test_create_link_rejects_malformed_url(client, auth_headers):
    """URLs that do not parse are rejected."""
    response = client.post(
        "/links",
        headers=auth_headers,
        json={"url": "not a url", "title": "Bad", "userId": auth_headers.user_id},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid URL format"


def test_create_link_rejects_unknown_link_type(client, auth_headers):
    """linkType must be one of the known platforms."""
    response = client.post(
        "/links",
        headers=auth_headers,
        json={"url": "https://example.com", "title": "Bad", "linkType": "myspace"},
    )
    assert response.status_code == 400


def test_create_link_for_another_user_forbidden(client, auth_headers, other_auth_headers):
    """The body cannot claim a different owner."""
    response = client.post(
        "/links",
        headers=auth_headers,
        json={"url": "https://example.com", "title": "x", "userId": other_auth_headers.user_id},
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "Invalid user ID"


def test_create_link_without_user_id_forbidden(client, auth_headers):
    """The body has to name its owner."""
    response = client.post(
        "/links", headers=auth_headers, json={"url": "https://example.com", "title": "x"}
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "Invalid user ID"
    assert client.get("/links", headers=auth_headers).json() == []


def test_create_link_requires_auth(client):
    """Anonymous callers cannot save links."""
    response = client.post("/links", json={"url": "https://example.com", "title": "x"})
    assert response.status_code == 401


def test_get_links_newest_first(client, auth_headers, other_auth_headers, create_link):
    """Only the caller's links are listed, newest first."""
    first = create_link(auth_headers, title="First")
    second = create_link(auth_headers, title="Second")
    create_link(other_auth_headers, title="Not mine")

    response = client.get("/links", headers=auth_headers)
    assert response.status_code == 200
    assert [link["id"] for link in response.json()] == [second, first]


def test_get_links_empty(client, auth_headers):
    """A new user has no links."""
    response = client.get("/links", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == []


def test_get_links_store_failure_is_not_empty(client, auth_headers):
    """An unreachable store is reported, not shown as an empty list."""

    class BrokenSession:
        def query(self, *args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is down"))

    app.dependency_overrides[get_link_repository] = lambda: LinkRepository(BrokenSession())

    response = client.get("/links", headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch links"


def test_get_missing_link(client, auth_headers):
    """Unknown ids are 404."""
    response = client.get("/links/does-not-exist", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Link not found"


def test_other_user_cannot_touch_link(client, auth_headers, other_auth_headers, create_link):
    """A link created by one user is off limits to another."""
    link_id = create_link(auth_headers, title="Private")

    response = client.get(f"/links/{link_id}", headers=other_auth_headers)
    assert response.status_code == 403
    assert "Private" not in response.text

    response = client.patch(
        f"/links/{link_id}",
        headers=other_auth_headers,
        json={"url": "https://evil.example.com", "title": "Mine now"},
    )
    assert response.status_code == 403

    response = client.delete(f"/links/{link_id}", headers=other_auth_headers)
    assert response.status_code == 403

    data = client.get(f"/links/{link_id}", headers=auth_headers).json()
    assert data["title"] == "Private"


def test_missing_link_is_404_before_ownership(client, other_auth_headers):
    """Existence is checked before ownership."""
    response = client.patch(
        "/links/missing",
        headers=other_auth_headers,
        json={"url": "https://example.com", "title": "x"},
    )
    assert response.status_code == 404


def test_update_link(client, auth_headers, create_link):
    """Supplied fields are overwritten and updatedAt moves forward."""
    link_id = create_link(
        auth_headers, description="keep me", tags=["dev"], category="Reading"
    )
    before = client.get(f"/links/{link_id}", headers=auth_headers).json()

    response = client.patch(
        f"/links/{link_id}",
        headers=auth_headers,
        json={"url": "https://github.com/pallets/flask", "title": "Flask", "tags": ["python"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    link = data["link"]
    assert link["title"] == "Flask"
    assert link["tags"] == ["python"]
    assert link["description"] == "keep me"
    assert link["category"] == "Reading"
    assert link["linkType"] == "github"
    assert link["userId"] == auth_headers.user_id
    assert link["createdAt"] == before["createdAt"]
    assert datetime.fromisoformat(link["updatedAt"]) >= datetime.fromisoformat(
        before["updatedAt"]
    )


def test_update_link_validates(client, auth_headers, create_link):
    """Updates re-validate url and title."""
    link_id = create_link(auth_headers)

    response = client.patch(f"/links/{link_id}", headers=auth_headers, json={"title": "x"})
    assert response.status_code == 400

    response = client.patch(
        f"/links/{link_id}", headers=auth_headers, json={"url": "nope", "title": "x"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid URL format"


def test_update_cannot_change_owner(client, auth_headers, other_auth_headers, create_link):
    """userId in an update body is ignored."""
    link_id = create_link(auth_headers)

    response = client.patch(
        f"/links/{link_id}",
        headers=auth_headers,
        json={
            "url": "https://example.com",
            "title": "x",
            "userId": other_auth_headers.user_id,
        },
    )
    assert response.status_code == 200
    assert response.json()["link"]["userId"] == auth_headers.user_id


def test_delete_link(client, auth_headers, create_link, db):
    """Deleted links are gone, and deleting again at the store is not an error."""
    link_id = create_link(auth_headers)

    response = client.delete(f"/links/{link_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.get(f"/links/{link_id}", headers=auth_headers).status_code == 404
    assert db.get(Link, link_id) is None
    assert LinkRepository(db).delete(link_id) is False

    response = client.delete(f"/links/{link_id}", headers=auth_headers)
    assert response.status_code == 404


def test_search_links(client, auth_headers, other_auth_headers, create_link):
    """Search matches title, tags, category and link type case-insensitively."""
    python = create_link(auth_headers, title="Python docs", tags=["Reference"])
    repo = create_link(auth_headers, url="https://github.com/a/b", title="Repo", category="Code")
    create_link(other_auth_headers, title="Python elsewhere")

    response = client.get("/links/search", headers=auth_headers, params={"q": "PYTHON"})
    assert response.status_code == 200
    assert [link["id"] for link in response.json()] == [python]

    response = client.get("/links/search", headers=auth_headers, params={"q": "reference"})
    assert [link["id"] for link in response.json()] == [python]

    response = client.get("/links/search", headers=auth_headers, params={"q": "github"})
    assert [link["id"] for link in response.json()] == [repo]

    response = client.get("/links/search", headers=auth_headers, params={"q": ""})
    assert [link["id"] for link in response.json()] == [repo, python]


@pytest.mark.parametrize(
    "fields, query",
    [
        ({"description": "Notes on Async IO"}, "async io"),
        ({"url": "https://docs.example.org/Guide"}, "EXAMPLE.ORG/guide"),
        ({"category": "Reading List"}, "reading"),
    ],
)
def test_search_matches_single_field(client, auth_headers, create_link, fields, query):
    """Each searchable field matches on its own."""
    create_link(auth_headers, title="Unrelated", url="https://other.test/")
    link_id = create_link(auth_headers, title="Plain", **fields)

    response = client.get("/links/search", headers=auth_headers, params={"q": query})
    assert response.status_code == 200
    assert [link["id"] for link in response.json()] == [link_id]


def test_search_folds_non_ascii_case(client, auth_headers, create_link):
    """Case folding is not limited to ASCII letters."""
    link_id = create_link(auth_headers, title="Ärger im Büro", tags=["Straße"])

    for query in ("ärger", "BÜRO", "STRAßE"):
        response = client.get("/links/search", headers=auth_headers, params={"q": query})
        assert [link["id"] for link in response.json()] == [link_id]


def test_search_tags_with_json_punctuation(client, auth_headers, create_link):
    """Backslashes and quotes in tags are matched literally."""
    backslash = create_link(auth_headers, tags=["c\\d"])
    quoted = create_link(auth_headers, tags=['say "hi"'])

    response = client.get("/links/search", headers=auth_headers, params={"q": "c\\d"})
    assert [link["id"] for link in response.json()] == [backslash]

    response = client.get("/links/search", headers=auth_headers, params={"q": '"hi"'})
    assert [link["id"] for link in response.json()] == [quoted]


def test_link_facets(client, auth_headers, create_link):
    """Facets list distinct tags, categories and types."""
    create_link(auth_headers, tags=["dev", "tools"], category="Work")
    create_link(auth_headers, url="https://reddit.com/r/python", tags=["dev"], category="")

    response = client.get("/links/facets", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert sorted(data["tags"]) == ["dev", "tools"]
    assert data["categories"] == ["Work"]
    assert sorted(data["linkTypes"]) == ["reddit", "website"]
