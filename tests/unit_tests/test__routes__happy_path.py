import base64
import dataclasses
import os
from urllib.parse import urlparse

from fastapi import status
from fastapi.testclient import TestClient

from tracker_api.main import create_app
from tracker_api.tables import MEETINGS, MEDIA

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}

TEST_PHOTO = b"\x89PNG\r\n\x1a\nfake"


def assert_cors(response):
    for header, value in CORS.items():
        assert response.headers[header] == value


def test_options_preflight(client: TestClient):
    response = client.options("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.content == b""
    assert_cors(response)


def test_options_any_path(client: TestClient):
    response = client.options("/anything/else")

    assert response.status_code == status.HTTP_200_OK
    assert_cors(response)


def test_get_without_sheet(client: TestClient):
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"error": "Missing sheet parameter"}
    assert_cors(response)


def test_get_missing_table_is_empty(client: TestClient):
    response = client.get("/", params={"sheet": "Meetings"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_add_meeting_round_trip(client: TestClient):
    response = client.post("/", json={
        "action": "add_meeting",
        "meetingDate": "2024-03-01",
        "zone": "North",
        "meetingTitle": "Kickoff",
        "attendees": 7,
    })

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"message": "Meeting added successfully", "id": "BCIEINM001"}
    assert_cors(response)

    rows = client.get("/", params={"sheet": "Meetings"}).json()
    assert rows[0] == MEETINGS.header
    assert rows[-1] == ["BCIEINM001", "2024-03-01", "North", "", "", "Kickoff", "", "7", "", "", ""]


def test_form_encoded_status_lifecycle(client: TestClient):
    response = client.post("/", data={"action": "add_status", "week": "W1", "zone": "North"})
    assert response.json() == {"message": "Weekly status added successfully"}

    response = client.post("/", data={"action": "edit_status", "row": "2", "week": "W1", "summary": "Done"})
    assert response.json() == {"message": "Weekly status updated successfully"}
    assert client.get("/", params={"sheet": "Weekly Status"}).json()[1] == ["W1", "", "", "Done", ""]

    response = client.post("/", data={"action": "delete_status", "row": "2"})
    assert response.json() == {"message": "Weekly status deleted successfully"}
    assert client.get("/", params={"sheet": "Weekly Status"}).json() == [
        ["Week", "Zone", "District", "Summary of This Week Activities", "Activities Planned for Next Week"]
    ]


def test_edit_header_row_over_http(client: TestClient):
    client.post("/", json={"action": "add_action", "actionItem": "Fix compressor"})

    response = client.post("/", json={"action": "edit_action", "row": 1, "actionItem": "x"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"error": "Row 1 is the header row and cannot be modified"}


def test_edit_before_table_exists(client: TestClient):
    response = client.post("/", json={"action": "edit_action", "row": "2"})

    assert response.json() == {"error": "Table not found: Action Items"}


def test_unknown_action(client: TestClient):
    response = client.post("/", json={"action": "foo"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"error": "Unknown action: foo"}
    assert_cors(response)


def test_missing_action(client: TestClient):
    response = client.post("/", json={"zone": "North"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"error": "Missing action parameter"}


def test_upload_media_missing_fields(client: TestClient):
    response = client.post("/", json={
        "action": "upload_media",
        "fileData": base64.b64encode(TEST_PHOTO).decode(),
    })

    error = response.json()["error"]
    assert "mimeType" in error
    assert "fileName" in error


def test_upload_media_json_then_fetch(client: TestClient):
    response = client.post("/", json={
        "action": "upload_media",
        "fileData": base64.b64encode(TEST_PHOTO).decode(),
        "fileName": "cold-room.png",
        "mimeType": "image/png",
        "week": "W3",
    })

    body = response.json()
    assert body["message"] == "File uploaded successfully"
    assert body["fileName"] == "cold-room.png"
    assert body["fileUrl"].endswith("-cold-room.png")

    media = client.get(urlparse(body["fileUrl"]).path)
    assert media.status_code == status.HTTP_200_OK
    assert media.content == TEST_PHOTO

    rows = client.get("/", params={"sheet": MEDIA.name}).json()
    assert rows[1][:6] == ["W3", "", "", "cold-room.png", body["fileUrl"], "image/png"]


def test_upload_media_multipart_file_part(client: TestClient):
    response = client.post(
        "/",
        data={"action": "upload_media", "fileName": "site.png", "mimeType": "image/png"},
        files={"fileData": ("site.png", TEST_PHOTO, "image/png")},
    )

    body = response.json()
    assert body["fileName"] == "site.png"
    assert client.get(urlparse(body["fileUrl"]).path).content == TEST_PHOTO


def test_upload_media_multipart_field_over_one_megabyte(client: TestClient):
    photo = os.urandom(900 * 1024)
    encoded = base64.b64encode(photo).decode()
    assert len(encoded) > 1024 * 1024

    response = client.post(
        "/",
        data={
            "action": "upload_media",
            "fileData": encoded,
            "fileName": "survey.jpg",
            "mimeType": "image/jpeg",
        },
        files={"attachment": ("note.txt", b"x", "text/plain")},
    )

    body = response.json()
    assert body["message"] == "File uploaded successfully"
    assert client.get(urlparse(body["fileUrl"]).path).content == photo


def test_upload_media_multipart_field_over_configured_limit(context):
    settings = context.settings.model_copy(update={"max_upload_bytes": 1024})
    app = create_app(context=dataclasses.replace(context, settings=settings))

    with TestClient(app) as small_client:
        response = small_client.post(
            "/",
            data={
                "action": "upload_media",
                "fileData": base64.b64encode(b"x" * 2048).decode(),
                "fileName": "big.txt",
                "mimeType": "text/plain",
            },
            files={"attachment": ("note.txt", b"x", "text/plain")},
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["error"].startswith("Invalid form body")
    assert list(context.blobs.folder.iterdir()) == []


def test_same_file_name_uploads_stay_separate(client: TestClient):
    urls = []
    for content in (b"first", b"second"):
        response = client.post("/", json={
            "action": "upload_media",
            "fileData": base64.b64encode(content).decode(),
            "fileName": "report.pdf",
            "mimeType": "application/pdf",
        })
        urls.append(response.json()["fileUrl"])

    assert urls[0] != urls[1]
    assert client.get(urlparse(urls[0]).path).content == b"first"
    assert client.get(urlparse(urls[1]).path).content == b"second"

    rows = client.get("/", params={"sheet": MEDIA.name}).json()
    assert [row[3] for row in rows[1:]] == ["report.pdf", "report.pdf"]
    assert [row[4] for row in rows[1:]] == urls


def test_media_not_found(client: TestClient):
    response = client.get("/media/missing.png")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert_cors(response)


def test_health(client: TestClient):
    client.post("/", json={"action": "add_status", "week": "W1"})

    response = client.get("/health")

    body = response.json()
    assert body["ready"] is True
    assert body["deployment_mode"] == "local-dev"
    assert body["tables"] == ["Weekly Status"]
