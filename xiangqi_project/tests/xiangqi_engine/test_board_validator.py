"""
测试BoardValidator棋局验证器
"""

from xiangqi_project.src.xiangqi_engine.rules_engine import Board, BoardValidator, PlayerSide


class TestBoardValidator:
    """BoardValidator类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.validator = BoardValidator()

    def test_initial_board_is_valid(self):
        """标准开局合法"""
        is_valid, errors = self.validator.full_validation(Board.initial())
        assert is_valid
        assert errors == []

    def test_missing_general(self):
        """缺少帅"""
        board = Board.from_fen("4k4/9/9/9/9/9/9/9/9/9")
        is_valid, errors = self.validator.validate_piece_counts(board)
        assert not is_valid
        assert len(errors) == 1

    def test_too_many_pieces(self):
        """棋子数量超限"""
        board = Board.from_fen("4k4/9/9/9/9/9/RRR6/9/9/4K4")
        is_valid, errors = self.validator.validate_piece_counts(board)
        assert not is_valid

    def test_general_outside_palace(self):
        """帅不在九宫内"""
        board = Board.from_fen("4k4/9/9/9/9/9/9/9/9/K8")
        is_valid, _ = self.validator.validate_piece_positions(board)
        assert not is_valid

    def test_elephant_positions(self):
        """相只能在七个点上"""
        valid = Board.from_fen("4k4/9/9/9/9/2B6/9/4B4/9/4K4")
        assert self.validator.validate_piece_positions(valid)[0]

        wrong_point = Board.from_fen("4k4/9/9/9/9/4B4/9/9/9/4K4")
        assert not self.validator.validate_piece_positions(wrong_point)[0]

        crossed = Board.from_fen("4k4/9/9/9/2B6/9/9/9/9/4K4")
        assert not self.validator.validate_piece_positions(crossed)[0]

        black = Board.from_fen("2b1k4/9/4b4/9/9/9/9/9/9/4K4")
        assert self.validator.validate_piece_positions(black)[0]

    def test_soldier_behind_start(self):
        """兵不可能在起始行之后"""
        board = Board.from_fen("4k4/9/9/9/9/9/9/P8/9/4K4")
        assert not self.validator.validate_piece_positions(board)[0]

    def test_generals_facing(self):
        """将帅照面"""
        board = Board.from_fen("4k4/9/9/9/9/9/9/9/9/4K4")
        is_valid, errors = self.validator.validate_generals_facing(board)
        assert not is_valid
        assert len(errors) == 1

    def test_validation_report(self):
        """测试验证报告"""
        board = Board.from_fen("4k4/9/9/9/9/9/9/9/9/K3K4")
        report = self.validator.get_validation_report(board)

        assert not report['overall_valid']
        assert set(report['validations']) == {
            'structure', 'piece_counts', 'piece_positions', 'generals_facing'
        }
        assert report['validations']['structure']['valid']
        assert not report['validations']['piece_counts']['valid']
        assert not report['validations']['piece_positions']['valid']
        assert report['total_errors'] >= 2

    def test_side_to_move(self):
        """轮到红方走棋时黑将不能正被将军"""
        board = Board.from_fen("4k4/9/9/9/9/9/9/9/4R4/3K5")

        is_valid, errors = self.validator.validate_side_to_move(board, PlayerSide.RED)
        assert not is_valid
        assert len(errors) == 1
        assert self.validator.validate_side_to_move(board, PlayerSide.BLACK)[0]

        assert self.validator.full_validation(board)[0]
        assert not self.validator.full_validation(board, PlayerSide.RED)[0]
        assert self.validator.full_validation(board, PlayerSide.BLACK)[0]

    def test_report_with_side_to_move(self):
        board = Board.from_fen("4k4/9/9/9/9/9/9/9/4R4/3K5")
        report = self.validator.get_validation_report(board, PlayerSide.RED)

        assert 'side_to_move' in report['validations']
        assert not report['validations']['side_to_move']['valid']
        assert report['total_errors'] == 1
