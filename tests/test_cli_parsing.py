"""Tests for CLI argument parsing and command dispatch."""

import logging

import httpx
import pytest

from pdfninja import cli
from pdfninja.cli import build_parser, main
from pdfninja.core.page_spec import parse_page_list, parse_page_order
from pdfninja.services.api_client import ProcessingClient
from pdfninja.utils.config_manager import ConfigManager


class TestParsePageList:
    """Tests for parse_page_list."""

    def test_single_page(self):
        assert parse_page_list("3") == [3]

    def test_range(self):
        assert parse_page_list("1-5") == [1, 2, 3, 4, 5]

    def test_comma_separated(self):
        assert parse_page_list("1,3,7") == [1, 3, 7]

    def test_mixed(self):
        assert parse_page_list("1-3,7,10-12") == [1, 2, 3, 7, 10, 11, 12]

    def test_deduplicates(self):
        assert parse_page_list("1-3,2-4") == [1, 2, 3, 4]

    def test_strips_whitespace(self):
        assert parse_page_list(" 1 , 3 - 5 ") == [1, 3, 4, 5]

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            parse_page_list("0,1,-1,2")

    def test_empty_parts_skipped(self):
        assert parse_page_list(",1,,2,") == [1, 2]

    def test_invalid_raises(self):
        with pytest.raises(ValueError, match="Invalid page specification"):
            parse_page_list("abc")

    def test_empty_string(self):
        assert parse_page_list("") == []


class TestParsePageOrder:
    def test_keeps_order(self):
        assert parse_page_order("3,1,2") == [3, 1, 2]

    def test_duplicate_raises(self):
        with pytest.raises(ValueError, match="more than once"):
            parse_page_order("1,2,1")

    def test_invalid_raises(self):
        with pytest.raises(ValueError, match="Invalid page number"):
            parse_page_order("1,x")


class TestBuildParser:
    """Tests for build_parser."""

    def test_split_subcommand(self):
        args = build_parser().parse_args(["split", "in.pdf", "--pages", "1-3"])
        assert args.command == "split"
        assert str(args.input) == "in.pdf"
        assert args.output is None
        assert args.pages == "1-3"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--version"])
        assert exc.value.code == 0
        assert "PDFNinja 1.0.0" in capsys.readouterr().out

    def test_split_requires_pages(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["split", "in.pdf"])

    def test_global_options(self):
        args = build_parser().parse_args(
            ["-v", "--api-url", "http://localhost:8000", "--timeout", "30", "repair", "a.pdf"]
        )
        assert args.verbose is True
        assert args.api_url == "http://localhost:8000"
        assert args.timeout == 30.0

    def test_merge_subcommand(self):
        args = build_parser().parse_args(["merge", "a.pdf", "b.pdf", "-o", "merged.pdf"])
        assert args.command == "merge"
        assert len(args.inputs) == 2

    def test_organize_requires_order_or_reverse(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["organize", "in.pdf"])
        with pytest.raises(SystemExit):
            build_parser().parse_args(["organize", "in.pdf", "--order", "2,1", "--reverse"])

    def test_rotate_subcommand(self):
        args = build_parser().parse_args(["rotate", "in.pdf", "--angle", "90"])
        assert args.angle == 90
        assert args.pages is None

    def test_rotate_invalid_angle(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["rotate", "in.pdf", "--angle", "45"])

    def test_compress_level_choices(self):
        args = build_parser().parse_args(["compress", "in.pdf", "--level", "high"])
        assert args.level == "high"
        with pytest.raises(SystemExit):
            build_parser().parse_args(["compress", "in.pdf", "--level", "extreme"])

    def test_ocr_language(self):
        args = build_parser().parse_args(["ocr", "in.pdf", "--language", "fra"])
        assert args.language == "fra"

    def test_watermark_text_and_image_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["watermark", "in.pdf", "--text", "A", "--image", "l.png"])

    def test_watermark_grid_position_range(self):
        args = build_parser().parse_args(["watermark", "in.pdf", "--grid-position", "8"])
        assert args.grid_position == 8
        with pytest.raises(SystemExit):
            build_parser().parse_args(["watermark", "in.pdf", "--grid-position", "9"])

    def test_page_numbers(self):
        args = build_parser().parse_args(
            ["page-numbers", "in.pdf", "--format", "roman", "--skip-first"]
        )
        assert args.format == "roman"
        assert args.skip_first is True
        assert args.skip_last is False

    def test_convert_target(self):
        args = build_parser().parse_args(["convert", "pdf-to-jpg", "in.pdf"])
        assert args.target == "pdf-to-jpg"
        assert str(args.input) == "in.pdf"


class FakeApi:
    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.status >= 400:
            return httpx.Response(self.status, json={"details": "quota exceeded"})
        return httpx.Response(200, content=b"%PDF-result")


@pytest.fixture
def api(monkeypatch, tmp_path):
    fake = FakeApi()
    config = ConfigManager(config_path=str(tmp_path / "settings.json"))
    monkeypatch.setattr(cli, "get_config_manager", lambda: config)
    monkeypatch.setattr(
        cli,
        "_make_client",
        lambda args: ProcessingClient(
            "https://api.example.test", client=httpx.Client(transport=httpx.MockTransport(fake))
        ),
    )
    return fake


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "pdfninja-cli" in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        assert main(["repair", str(tmp_path / "missing.pdf")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_info(self, tmp_path, pdf_bytes, capsys):
        source = tmp_path / "three.pdf"
        source.write_bytes(pdf_bytes)
        assert main(["info", str(source)]) == 0
        assert "Pages:      3" in capsys.readouterr().out

    def test_extract_writes_default_output(self, api, tmp_path, pdf_bytes):
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["extract", str(source), "--pages", "1,3"]) == 0

        assert (tmp_path / "doc_extracted.pdf").read_bytes() == b"%PDF-result"
        assert b"[1,3]" in api.requests[0].content

    def test_explicit_output(self, api, tmp_path, pdf_bytes):
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)
        target = tmp_path / "out"
        target.mkdir()

        assert main(["compress", str(source), "-o", str(target / "small.pdf")]) == 0
        assert (target / "small.pdf").exists()
        assert b"medium" in api.requests[0].content

    def test_existing_output_needs_force(self, api, tmp_path, pdf_bytes, capsys):
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)
        (tmp_path / "repaired_doc.pdf").write_bytes(b"old")

        assert main(["repair", str(source)]) == 1
        assert "already exists" in capsys.readouterr().err
        assert (tmp_path / "repaired_doc.pdf").read_bytes() == b"old"

        assert main(["--force", "repair", str(source)]) == 0
        assert (tmp_path / "repaired_doc.pdf").read_bytes() == b"%PDF-result"

    def test_remove_all_pages_is_local_error(self, api, tmp_path, pdf_bytes, capsys):
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["remove", str(source), "--pages", "1-3"]) == 1
        assert "cannot remove all pages" in capsys.readouterr().err
        assert api.requests == []

    def test_page_out_of_range(self, api, tmp_path, pdf_bytes, capsys):
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["rotate", str(source), "--angle", "90", "--pages", "2,7"]) == 1
        assert "outside 1..3" in capsys.readouterr().err
        assert api.requests == []

    def test_rotate_selected_pages(self, api, tmp_path, pdf_bytes):
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["rotate", str(source), "--angle", "270", "--pages", "2"]) == 0
        assert b'{"1":0,"2":270,"3":0}' in api.requests[0].content

    def test_organize_reverse(self, api, tmp_path, pdf_bytes):
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["organize", str(source), "--reverse"]) == 0
        assert b"[3,2,1]" in api.requests[0].content

    def test_remote_error(self, api, tmp_path, pdf_bytes, capsys):
        api.status = 429
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["ocr", str(source)]) == 1
        assert "quota exceeded" in capsys.readouterr().err

    def test_invalid_pdf(self, api, tmp_path, capsys):
        source = tmp_path / "broken.pdf"
        source.write_bytes(b"garbage")

        assert main(["repair", str(source)]) == 1
        assert "Invalid PDF file" in capsys.readouterr().err
        assert api.requests == []

    def test_merge(self, api, tmp_path, pdf_factory):
        a = tmp_path / "a.pdf"
        b = tmp_path / "b.pdf"
        a.write_bytes(pdf_factory(1))
        b.write_bytes(pdf_factory(2))

        assert main(["merge", str(a), str(b), "-o", str(tmp_path / "all.pdf")]) == 0
        assert (tmp_path / "all.pdf").exists()
        assert api.requests[0].content.count(b'name="pdfs"') == 2

    def test_merge_single_file(self, api, tmp_path, pdf_bytes, capsys):
        a = tmp_path / "a.pdf"
        a.write_bytes(pdf_bytes)

        assert main(["merge", str(a), "-o", str(tmp_path / "all.pdf")]) == 1
        assert "at least 2 files" in capsys.readouterr().err

    def test_core_logs_reach_root_once(self, api, tmp_path, pdf_bytes, caplog):
        caplog.set_level(logging.DEBUG)
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["-v", "repair", str(source)]) == 0

        messages = [r.getMessage() for r in caplog.records]
        assert sum(m.startswith("Loading doc.pdf") for m in messages) == 1
        assert any("Initialized page set" in m for m in messages)
        assert logging.getLogger("PDFNinja").handlers == []


class TestClientConfiguration:
    def test_invalid_timeout_setting(self, monkeypatch, tmp_path, pdf_bytes, capsys):
        config = ConfigManager(config_path=str(tmp_path / "settings.json"))
        config.set("api.timeout", "soon", save_immediately=False)
        monkeypatch.setattr(cli, "get_config_manager", lambda: config)
        source = tmp_path / "doc.pdf"
        source.write_bytes(pdf_bytes)

        assert main(["repair", str(source)]) == 1
        assert "api.timeout" in capsys.readouterr().err

    def test_api_url_flag_wins(self, monkeypatch, tmp_path):
        config = ConfigManager(config_path=str(tmp_path / "settings.json"))
        config.set("api.base_url", "http://configured", save_immediately=False)
        monkeypatch.setattr(cli, "get_config_manager", lambda: config)
        args = build_parser().parse_args(["--api-url", "http://flag/", "repair", "a.pdf"])

        with cli._make_client(args) as client:
            assert client.base_url == "http://flag"
            assert client.timeout is None
