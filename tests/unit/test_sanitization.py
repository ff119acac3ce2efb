"""Input sanitizer: titles/tags markup, storage identifiers, file names."""

import pytest

from clinidocs.shared.utils.sanitization import InputSanitizer, sanitize_text


class TestSanitizeText:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("MRI Report", "MRI Report"),
            ("  padded  ", "padded"),
            ("<script>alert(1)</script>Labs", "Labs"),
            ("<b>Brain</b> scan", "Brain scan"),
            ("Labs & imaging", "Labs & imaging"),
            ("", ""),
        ],
    )
    def test_strips_markup(self, raw: str, expected: str) -> None:
        assert sanitize_text(raw) == expected


class TestSanitizeIdentifier:
    @pytest.mark.parametrize("value", ["patient-001", "P_42", "mrn.7781"])
    def test_accepts_storage_safe_ids(self, value: str) -> None:
        assert InputSanitizer.sanitize_identifier(value) == value

    @pytest.mark.parametrize("value", ["", "..", "a/b", "p 1", "p\x00", "../etc"])
    def test_rejects_path_characters(self, value: str) -> None:
        with pytest.raises(ValueError, match="Invalid identifier"):
            InputSanitizer.sanitize_identifier(value)


class TestSanitizeFilename:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("report.pdf", "report.pdf"),
            ("../../etc/passwd", "passwd"),
            ("C:\\scans\\mri.dcm", "mri.dcm"),
            (".hidden.pdf", "hidden.pdf"),
            ("trailing. ", "trailing"),
        ],
    )
    def test_keeps_basename(self, raw: str, expected: str) -> None:
        assert InputSanitizer.sanitize_filename(raw) == expected

    @pytest.mark.parametrize("raw", ["", "..", "dir/", "   "])
    def test_rejects_empty_names(self, raw: str) -> None:
        with pytest.raises(ValueError, match="empty or invalid"):
            InputSanitizer.sanitize_filename(raw)

    @pytest.mark.parametrize("raw", ["CON", "nul.txt", "com1.pdf", "LPT9"])
    def test_rejects_reserved_names(self, raw: str) -> None:
        with pytest.raises(ValueError, match="Reserved filename"):
            InputSanitizer.sanitize_filename(raw)
