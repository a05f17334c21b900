"""
测试GameState对局状态机

测试走子、悔棋、终局判定、重复局面和棋以及错误处理。
"""

import pytest

from xiangqi_project.src.xiangqi_engine.rules_engine import (
    Board, GameResult, GameState, GameStatus, Move, PieceType, PlayerSide, RuleEngine
)
from xiangqi_project.src.xiangqi_engine.utils.exceptions import (
    GameOverError, GameStateError, GeneralNotFoundError, IllegalMoveError, NoHistoryError,
    NotationError
)


# 红方走 a5a0 后将死黑方
BEFORE_CHECKMATE_FEN = "4k4/8R/9/9/9/R8/9/9/9/3K5 w"
# 红方走 e3e2 后黑方困毙
BEFORE_STALEMATE_FEN = "4k4/9/9/4P4/9/3R1R3/9/9/9/4K4 w"
# 轮到红方走棋，黑将已暴露在红车之下
EXPOSED_GENERAL_FEN = "4k4/9/9/9/9/9/9/9/4R4/3K5 w"

# 双方来回跳马，每4步回到同一局面
HORSE_SHUFFLE = ["b9c7", "b0c2", "c7b9", "c2b0"]


class BrokenRuleEngine(RuleEngine):
    """开启 broken 后判定结果时抛出异常"""

    broken = False

    def has_legal_move(self, board, side):
        if self.broken:
            raise GeneralNotFoundError(side.display_name)
        return super().has_legal_move(board, side)


def play(state, *notations):
    for notation in notations:
        state.apply_move(Move.from_coordinate_notation(notation))
    return state


class TestGameState:
    """GameState类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.state = GameState.new_game()

    def test_new_game(self):
        """测试新对局"""
        assert self.state.turn is PlayerSide.RED
        assert self.state.result == GameResult.ongoing()
        assert not self.state.is_over
        assert self.state.move_count == 0
        assert self.state.last_move is None
        assert len(self.state.legal_moves()) == 44
        assert self.state.repetition_count() == 1

    def test_apply_move(self):
        """测试走子后轮次交替"""
        self.state.apply_move(Move((1, 9), (2, 7)))

        assert self.state.turn is PlayerSide.BLACK
        assert self.state.move_count == 1
        assert self.state.last_move.piece.piece_type is PieceType.HORSE
        assert self.state.board.piece_at((2, 7)).piece_type is PieceType.HORSE
        assert self.state.board.is_empty((1, 9))

    def test_apply_move_returns_state(self):
        """apply_move 可以链式调用"""
        result = self.state.apply_move(Move((1, 9), (2, 7))).apply_move(Move((1, 0), (2, 2)))
        assert result is self.state
        assert self.state.turn is PlayerSide.RED

    def test_illegal_move_leaves_state_unchanged(self):
        """非法走法不改变状态"""
        before = self.state.board.clone()

        with pytest.raises(IllegalMoveError):
            self.state.apply_move(Move((0, 9), (0, 5)))

        assert self.state.board == before
        assert self.state.turn is PlayerSide.RED
        assert self.state.move_count == 0

    def test_wrong_side_move(self):
        """不能走对方的棋子"""
        with pytest.raises(IllegalMoveError) as exc_info:
            self.state.apply_move(Move((1, 0), (2, 2)))
        assert exc_info.value.error_code == "ILLEGAL_MOVE"

    def test_legal_moves_for_other_side(self):
        """可以查询非走子方的走法"""
        assert len(self.state.legal_moves(PlayerSide.BLACK)) == 44

    def test_undo_restores_capture(self):
        """悔棋还原被吃的棋子"""
        initial = self.state.board.clone()
        self.state.apply_move(Move((7, 7), (7, 0)))

        assert self.state.last_move.captured_piece.piece_type is PieceType.HORSE
        assert len(self.state.board) == 31

        self.state.undo()

        assert self.state.board == initial
        assert self.state.turn is PlayerSide.RED
        assert self.state.move_count == 0
        assert self.state.repetition_count() == 1

    def test_undo_without_history(self):
        """没有历史时悔棋抛出异常"""
        with pytest.raises(NoHistoryError):
            self.state.undo()

    def test_apply_undo_sequence(self):
        """多步走子后逐步悔棋回到开局"""
        initial_fen = self.state.to_fen()
        play(self.state, "h7e7", "h0g2", "h9g7", "i0h0", "i9h9")

        for _ in range(5):
            self.state.undo()

        assert self.state.to_fen() == initial_fen
        assert self.state.position_counts == GameState.new_game().position_counts


class TestFenState:
    """从FEN创建对局的测试"""

    def test_to_fen(self):
        state = GameState.new_game()
        assert state.to_fen().endswith(" w")
        play(state, "b9c7")
        assert state.to_fen().endswith(" b")

    def test_from_fen_turn(self):
        """FEN的第二个字段决定走子方"""
        state = GameState.from_fen("4k4/9/9/9/9/9/9/9/4A4/3K5 b")
        assert state.turn is PlayerSide.BLACK

        state = GameState.from_fen("4k4/9/9/9/9/9/9/9/4A4/3K5")
        assert state.turn is PlayerSide.RED

    def test_from_fen_validation(self):
        """开启验证时拒绝不合法的局面"""
        with pytest.raises(GameStateError):
            GameState.from_fen("4k4/9/9/9/9/9/9/9/4K4/4K4", validate=True)

        state = GameState.from_fen(BEFORE_CHECKMATE_FEN, validate=True)
        assert not state.is_over

    def test_from_bad_fen(self):
        with pytest.raises(NotationError):
            GameState.from_fen("not a fen")


class TestGameEnd:
    """终局判定的测试"""

    def test_checkmate(self):
        """测试将死"""
        state = GameState.from_fen(BEFORE_CHECKMATE_FEN)
        play(state, "a5a0")

        assert state.is_over
        assert state.result.status is GameStatus.CHECKMATE
        assert state.result.winner is PlayerSide.RED
        assert state.legal_moves() == []
        assert str(state.result) == "将死，红方胜"

    def test_no_move_after_game_over(self):
        """终局后拒绝任何走法"""
        state = play(GameState.from_fen(BEFORE_CHECKMATE_FEN), "a5a0")

        with pytest.raises(GameOverError):
            state.apply_move(Move((4, 0), (4, 1)))

    def test_checkmate_at_construction(self):
        """起始局面即为将死"""
        state = GameState.from_fen("R3k4/8R/9/9/9/9/9/9/9/3K5 b")
        assert state.result == GameResult.checkmate(PlayerSide.RED)

    def test_red_general_mated_on_file(self):
        """黑车在中路将军，另一黑车封住底线，红帅无路可走"""
        state = GameState.from_fen("3k5/9/9/9/9/4r4/9/9/9/r3K4 w")

        assert state.is_in_check()
        assert state.result.status is GameStatus.CHECKMATE
        assert state.result.winner is PlayerSide.BLACK

    def test_stalemate(self):
        """测试困毙"""
        state = play(GameState.from_fen(BEFORE_STALEMATE_FEN), "e3e2")

        assert state.result.status is GameStatus.STALEMATE
        assert state.result.winner is None
        assert not state.is_in_check()

    def test_undo_from_terminal_state(self):
        """终局后悔棋回到进行中"""
        state = play(GameState.from_fen(BEFORE_CHECKMATE_FEN), "a5a0")
        state.undo()

        assert state.result.status is GameStatus.ONGOING
        assert state.turn is PlayerSide.RED
        assert state.board.piece_at((0, 5)).piece_type is PieceType.CHARIOT

    def test_check_state(self):
        """将军但不是将死"""
        state = GameState.from_fen("4k4/9/9/9/9/4r4/9/9/9/4K4 w")

        assert state.is_in_check()
        assert not state.is_in_check(PlayerSide.BLACK)
        assert not state.is_over
        assert len(state.legal_moves()) == 2

    def test_capturing_general_ends_game(self):
        """吃掉对方的将后对局立即结束"""
        state = GameState.from_fen(EXPOSED_GENERAL_FEN)
        state.apply_move(Move((4, 8), (4, 0)))

        assert not state.board.has_general(PlayerSide.BLACK)
        assert state.result == GameResult.checkmate(PlayerSide.RED)
        assert state.move_count == 1
        assert state.legal_moves() == []

        state.undo()
        assert state.board.has_general(PlayerSide.BLACK)
        assert state.result.status is GameStatus.ONGOING

    def test_exposed_general_rejected_by_validation(self):
        """非走子方正被将军的局面不能通过验证"""
        with pytest.raises(GameStateError):
            GameState.from_fen(EXPOSED_GENERAL_FEN, validate=True)

        state = GameState.from_fen(EXPOSED_GENERAL_FEN.replace(" w", " b"), validate=True)
        assert state.is_in_check()

    def test_failed_evaluation_leaves_state_unchanged(self):
        """走子后判定失败时状态回到走子前"""
        engine = BrokenRuleEngine()
        state = GameState.new_game(rule_engine=engine)
        before = state.board.clone()
        engine.broken = True

        with pytest.raises(GeneralNotFoundError):
            state.apply_move(Move((1, 9), (2, 7)))

        assert state.board == before
        assert state.turn is PlayerSide.RED
        assert state.move_count == 0
        assert state.position_counts == GameState.new_game().position_counts
        assert state.result.status is GameStatus.ONGOING


class TestRepetition:
    """重复局面和棋的测试"""

    def test_draw_by_repetition(self):
        """同一局面第三次出现时判和"""
        state = GameState.new_game()
        play(state, *HORSE_SHUFFLE)
        assert state.repetition_count() == 2
        play(state, *HORSE_SHUFFLE[:3])
        assert not state.is_over

        play(state, HORSE_SHUFFLE[3])

        assert state.repetition_count() == 3
        assert state.result.status is GameStatus.DRAW_BY_REPETITION
        assert state.result.winner is None
        with pytest.raises(GameOverError):
            play(state, "b9c7")

    def test_repetition_disabled(self):
        """关闭重复局面和棋"""
        state = GameState.new_game(draw_by_repetition=False)
        play(state, *HORSE_SHUFFLE, *HORSE_SHUFFLE, *HORSE_SHUFFLE)

        assert not state.is_over
        assert state.repetition_count() == 4

    def test_custom_repetition_limit(self):
        """自定义重复次数"""
        state = GameState.new_game(repetition_limit=2)
        play(state, *HORSE_SHUFFLE)
        assert state.result.status is GameStatus.DRAW_BY_REPETITION

    def test_undo_forgets_position(self):
        """悔棋后重复计数减少，和棋状态解除"""
        state = GameState.new_game()
        play(state, *HORSE_SHUFFLE, *HORSE_SHUFFLE)
        assert state.is_over

        state.undo()
        assert not state.is_over

        state.apply_move(Move((2, 2), (1, 0)))
        assert state.result.status is GameStatus.DRAW_BY_REPETITION

    def test_same_board_different_turn(self):
        """同一占位不同走子方视为不同局面"""
        state = GameState(Board.initial(), PlayerSide.BLACK)
        assert state.position_counts != GameState.new_game().position_counts
