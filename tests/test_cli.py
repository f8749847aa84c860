"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest
import yaml
from click.testing import CliRunner

from blograph.cli import main


@pytest.fixture
def config(tmp_path):
    (tmp_path / "seed.yaml").write_text(yaml.safe_dump({
        "users": [
            {"id": "1", "name": "Andrew", "email": "andrew@example.com"},
            {"id": "2", "name": "Sarah", "email": "sarah@example.com"},
        ],
        "posts": [
            {"id": "10", "title": "First post test", "body": "", "published": True, "author": "1"},
            {"id": "11", "title": "Second post test", "body": "", "published": True, "author": "2"},
        ],
        "comments": [{"id": "100", "text": "hi", "author": "2", "post": "10"}],
    }))
    cfg = tmp_path / "config.yaml"
    cfg.write_text(yaml.safe_dump({"seed": {"path": "seed.yaml"}}))
    return str(cfg)


class TestCLI:
    def test_users(self, config):
        result = CliRunner().invoke(main, ["-c", config, "users", "sar"])
        assert result.exit_code == 0, result.output
        assert [u["name"] for u in json.loads(result.output)] == ["Sarah"]

    def test_posts_with_fields(self, config):
        result = CliRunner().invoke(
            main, ["-c", config, "posts", "second", "--fields", "title author { name }"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"title": "Second post test", "author": {"name": "Sarah"}}
        ]

    def test_comments(self, config):
        result = CliRunner().invoke(main, ["-c", config, "comments", "-f", "text post { id }"])
        assert json.loads(result.output) == [{"text": "hi", "post": {"id": "10"}}]

    def test_bad_fields(self, config):
        result = CliRunner().invoke(main, ["-c", config, "users", "--fields", "name {"])
        assert result.exit_code != 0
        assert "--fields" in result.output

    def test_info(self, config):
        result = CliRunner().invoke(main, ["-c", config, "info"])
        assert result.exit_code == 0, result.output
        assert "Users:     2" in result.output
        assert "Comments:  1" in result.output
