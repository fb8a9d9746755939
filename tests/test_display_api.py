# =============================================================================
# tests/test_display_api.py - Project Display Image Tests
# =============================================================================
# Tests for GET /project/avatar and GET /project/poster.
#
# Run with: pytest tests/test_display_api.py -v
# =============================================================================

import pytest

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x01" * 32


@pytest.fixture
def approved_images(display_root):
    (display_root / "avatar" / "7.png").write_bytes(PNG_BYTES)
    (display_root / "poster" / "7.png").write_bytes(PNG_BYTES + b"poster")
    return display_root


@pytest.mark.parametrize("kind", ["avatar", "poster"])
class TestDisplayImages:

    def test_serves_png(self, client, approved_images, kind):
        response = client.get(f"/project/{kind}", params={"id": "7"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == (approved_images / kind / "7.png").read_bytes()

    def test_missing_id(self, client, kind):
        response = client.get(f"/project/{kind}")

        assert response.status_code == 400
        assert response.json()["detail"] == "id parameter is required"

    @pytest.mark.parametrize("project_id", ["abc", "1.5", "../7", "7/../../etc/passwd", "7 ", "٣", "1٢"])
    def test_non_numeric_id(self, client, approved_images, kind, project_id):
        response = client.get(f"/project/{kind}", params={"id": project_id})

        assert response.status_code == 400
        assert response.json()["detail"] == "id must be a valid number"

    def test_non_ascii_digits_never_reach_the_filesystem(self, client, approved_images, kind):
        (approved_images / kind / "٣.png").write_bytes(PNG_BYTES)

        response = client.get(f"/project/{kind}", params={"id": "٣"})

        assert response.status_code == 400

    def test_unknown_id(self, client, approved_images, kind):
        response = client.get(f"/project/{kind}", params={"id": "8"})

        assert response.status_code == 404
        assert response.json()["detail"] == f"{kind} not found"

    def test_signed_id_is_a_number(self, client, approved_images, kind):
        response = client.get(f"/project/{kind}", params={"id": "-1"})

        assert response.status_code == 404
