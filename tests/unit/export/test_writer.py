"""Tests for writing exports to disk."""

import pytest

from sqlitejson.exceptions import ExportIOError
from sqlitejson.export.writer import export_to_file


class TestExportToFile:
    """Tests for export_to_file."""

    @pytest.mark.asyncio
    async def test_writes_exact_content(self, tmp_path):
        """Test file holds the JSON string with no framing."""
        dest = tmp_path / "out.json"

        path = await export_to_file('[{"name":"Zoë"}]', dest)

        assert path == dest
        assert dest.read_text(encoding="utf-8") == '[{"name":"Zoë"}]'

    @pytest.mark.asyncio
    async def test_overwrites_existing_file(self, tmp_path):
        """Test existing file is replaced."""
        dest = tmp_path / "out.json"
        dest.write_text("previous content that is longer")

        await export_to_file("[]", str(dest))

        assert dest.read_text() == "[]"

    @pytest.mark.asyncio
    async def test_missing_parent_directory(self, tmp_path):
        """Test parent directories are not created."""
        dest = tmp_path / "missing" / "out.json"

        with pytest.raises(ExportIOError) as exc_info:
            await export_to_file("[]", dest)

        assert exc_info.value.context["path"] == str(dest)
        assert not dest.parent.exists()

    @pytest.mark.asyncio
    async def test_destination_is_directory(self, tmp_path):
        """Test writing over a directory fails."""
        with pytest.raises(ExportIOError):
            await export_to_file("[]", tmp_path)
