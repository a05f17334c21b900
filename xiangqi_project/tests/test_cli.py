"""
命令行接口测试
"""

import yaml
from click.testing import CliRunner

from xiangqi_project.main import cli


INITIAL_FEN = "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w"


class TestCli:
    """命令行命令的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.runner = CliRunner()

    def test_info(self):
        result = self.runner.invoke(cli, ['info'])
        assert result.exit_code == 0
        assert "中国象棋规则引擎" in result.output

    def test_version(self):
        result = self.runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_moves(self):
        """开局有44个合法走法"""
        result = self.runner.invoke(cli, ['moves'])
        assert result.exit_code == 0
        assert "共 44 个合法走法" in result.output
        assert "b9c7" in result.output

    def test_moves_from_fen(self):
        result = self.runner.invoke(cli, ['moves', '--fen', "4k4/9/9/9/9/4r4/9/9/9/4K4 w"])
        assert result.exit_code == 0
        assert "共 2 个合法走法" in result.output

    def test_moves_invalid_fen(self):
        result = self.runner.invoke(cli, ['moves', '--fen', "bad"])
        assert result.exit_code == 1
        assert "NOTATION_ERROR" in result.output

    def test_play(self):
        result = self.runner.invoke(cli, ['play', 'h7e7', 'h0g2'])
        assert result.exit_code == 0
        assert "走子方: 红方" in result.output
        assert "对局进行中" in result.output

    def test_play_checkmate(self):
        result = self.runner.invoke(cli, ['play', '--fen', "4k4/8R/9/9/9/R8/9/9/9/3K5 w", 'a5a0'])
        assert result.exit_code == 0
        assert "将死，红方胜" in result.output

    def test_play_illegal_move(self):
        result = self.runner.invoke(cli, ['play', 'a9a5'])
        assert result.exit_code == 1
        assert "ILLEGAL_MOVE" in result.output

    def test_validate(self):
        result = self.runner.invoke(cli, ['validate', INITIAL_FEN])
        assert result.exit_code == 0
        assert "局面合法" in result.output

    def test_validate_invalid_board(self):
        result = self.runner.invoke(cli, ['validate', "4k4/9/9/9/9/9/9/9/9/4K4"])
        assert result.exit_code == 1
        assert "generals_facing" in result.output

    def test_validate_side_to_move(self):
        """非走子方正被将军"""
        result = self.runner.invoke(cli, ['validate', "4k4/9/9/9/9/9/9/9/4R4/3K5 w"])
        assert result.exit_code == 1
        assert "side_to_move" in result.output

        result = self.runner.invoke(cli, ['validate', "4k4/9/9/9/9/9/9/9/4R4/3K5 b"])
        assert result.exit_code == 0

    def test_config_directory(self, tmp_path):
        """从配置目录读取对局配置"""
        with open(tmp_path / 'game_config.yaml', 'w', encoding='utf-8') as f:
            yaml.dump({'repetition_limit': 2, 'allow_undo': False}, f)

        result = self.runner.invoke(cli, ['--config', str(tmp_path), 'info'])
        assert result.exit_code == 0
        assert "第2次出现" in result.output
        assert "禁止" in result.output
