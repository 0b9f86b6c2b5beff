"""
テスト - CLIエントリーポイント
"""

import json
import os
import sys

import pytest

from src.montecarlo.__main__ import main


class TestMain:
    """main() のテスト"""

    def test_small_run(self, monkeypatch, capsys):
        """少ない試行回数で最後まで実行され、レポートが表示されること"""
        monkeypatch.setattr(sys, "argv", ["prog", "--trials", "100", "--chunk-size", "30", "--seed", "1"])
        main()
        out = capsys.readouterr().out

        assert "双色球" in out
        assert "試行回数: 100" in out
        assert "100.0%" in out
        assert "【推奨番号】" in out

    def test_json_export(self, monkeypatch, capsys, tmp_path):
        """--json 指定で出力ディレクトリにJSONが保存されること"""
        monkeypatch.setattr(
            sys,
            "argv",
            ["prog", "--game", "k8", "--trials", "20", "--seed", "2", "--json", "--output-dir", str(tmp_path)],
        )
        main()

        files = os.listdir(tmp_path)
        assert len(files) == 1
        with open(tmp_path / files[0], encoding="utf-8") as f:
            data = json.load(f)
        assert data["metadata"]["trials"] == 20
        assert len(data["recommended"]) == 20

    def test_invalid_trials(self, monkeypatch, capsys):
        """試行回数が不正な場合は終了コード1で終わること"""
        monkeypatch.setattr(sys, "argv", ["prog", "--trials", "0"])
        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "エラー" in capsys.readouterr().err
