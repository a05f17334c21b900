"""
对局状态机

负责轮次交替、走法执行与悔棋、终局判定以及重复局面检测。
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .board import Board
from .board_validator import BoardValidator
from .move import Move
from .pieces import PlayerSide
from .rule_engine import RuleEngine
from ..utils.exceptions import (
    GameOverError, GameStateError, IllegalMoveError, NoHistoryError, XiangqiError
)
from ..utils.logger import LoggerMixin


class GameStatus(Enum):
    """对局状态"""
    ONGOING = "ongoing"                        # 进行中
    CHECKMATE = "checkmate"                    # 将死
    STALEMATE = "stalemate"                    # 困毙
    DRAW_BY_REPETITION = "draw_by_repetition"  # 重复局面和棋


@dataclass(frozen=True)
class GameResult:
    """对局结果，只有将死时 winner 不为空"""
    status: GameStatus = GameStatus.ONGOING
    winner: Optional[PlayerSide] = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not GameStatus.ONGOING

    @classmethod
    def ongoing(cls) -> 'GameResult':
        return cls(GameStatus.ONGOING)

    @classmethod
    def checkmate(cls, winner: PlayerSide) -> 'GameResult':
        return cls(GameStatus.CHECKMATE, winner)

    def __str__(self) -> str:
        if self.status is GameStatus.CHECKMATE:
            return f"将死，{self.winner.display_name}胜"
        return {
            GameStatus.ONGOING: "对局进行中",
            GameStatus.STALEMATE: "困毙",
            GameStatus.DRAW_BY_REPETITION: "重复局面和棋",
        }[self.status]


class GameState(LoggerMixin):
    """
    对局状态

    只能通过 apply_move / undo 修改。走法历史只追加，悔棋时弹出最后一步，
    并根据记录的被吃棋子还原棋盘。
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        turn: PlayerSide = PlayerSide.RED,
        draw_by_repetition: bool = True,
        repetition_limit: int = 3,
        rule_engine: Optional[RuleEngine] = None
    ):
        """
        初始化对局

        Args:
            board: 起始棋盘，None 表示标准开局
            turn: 先走的一方，标准规则为红方先走
            draw_by_repetition: 是否启用重复局面和棋
            repetition_limit: 同一局面出现多少次判和
            rule_engine: 规则引擎
        """
        self.board = board if board is not None else Board.initial()
        self.turn = turn
        self.move_history: List[Move] = []
        self.draw_by_repetition = draw_by_repetition
        self.repetition_limit = repetition_limit
        self.rule_engine = rule_engine or RuleEngine()

        # (局面签名, 走子方) -> 出现次数，包含起始局面
        self.position_counts: Counter = Counter()
        self.position_counts[self._position_key()] += 1

        self.result = self._evaluate_result()

    @classmethod
    def new_game(cls, **kwargs) -> 'GameState':
        """标准开局，红方先走"""
        return cls(Board.initial(), PlayerSide.RED, **kwargs)

    @classmethod
    def from_fen(cls, fen: str, validate: bool = False, **kwargs) -> 'GameState':
        """
        从FEN创建对局

        Args:
            fen: FEN字符串，第二个字段为走子方 ('w'/'r' 红方, 'b' 黑方)，缺省为红方
            validate: 是否先用 BoardValidator 检查局面
            **kwargs: 传给构造函数的其他参数

        Raises:
            NotationError: FEN无法解析
            GameStateError: 开启验证且局面不合法
        """
        turn = cls.turn_from_fen(fen)
        board = Board.from_fen(fen)

        if validate:
            is_valid, errors = BoardValidator().full_validation(board, turn)
            if not is_valid:
                raise GameStateError(fen, "; ".join(errors))

        return cls(board, turn, **kwargs)

    @staticmethod
    def turn_from_fen(fen: str) -> PlayerSide:
        """FEN第二个字段给出的走子方 ('w'/'r' 红方, 'b' 黑方)，缺省为红方"""
        parts = fen.split()
        return PlayerSide.BLACK if len(parts) > 1 and parts[1].lower() == 'b' else PlayerSide.RED

    def to_fen(self) -> str:
        side_char = 'w' if self.turn is PlayerSide.RED else 'b'
        return f"{self.board.to_fen()} {side_char}"

    # ==================== 查询 ====================

    @property
    def is_over(self) -> bool:
        return self.result.is_terminal

    @property
    def move_count(self) -> int:
        return len(self.move_history)

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    def legal_moves(self, side: Optional[PlayerSide] = None) -> List[Move]:
        """
        获取合法走法

        Args:
            side: 指定一方，None 表示当前走子方

        Returns:
            List[Move]: 合法走法列表，终局后为空
        """
        if self.is_over:
            return []
        return self.rule_engine.generate_legal_moves(self.board, side or self.turn)

    def is_in_check(self, side: Optional[PlayerSide] = None) -> bool:
        return self.rule_engine.is_in_check(self.board, side or self.turn)

    def repetition_count(self) -> int:
        """当前局面（含走子方）已出现的次数"""
        return self.position_counts[self._position_key()]

    # ==================== 状态变更 ====================

    def apply_move(self, move: Move) -> 'GameState':
        """
        执行走法

        Args:
            move: 要执行的走法，只需给出起止坐标

        Returns:
            GameState: 自身，便于链式调用

        Raises:
            GameOverError: 对局已结束
            IllegalMoveError: 走法不在当前走子方的合法走法中
        """
        if self.is_over:
            raise GameOverError(str(self.result), f"拒绝走法 {move}")

        legal_move = self.rule_engine.find_legal_move(self.board, move, self.turn)
        if legal_move is None:
            raise IllegalMoveError(str(move), f"不是{self.turn.display_name}的合法走法")

        self.board.move_piece(legal_move.from_pos, legal_move.to_pos)
        self.move_history.append(legal_move)
        self.turn = self.turn.opponent
        self.position_counts[self._position_key()] += 1

        try:
            self.result = self._evaluate_result()
        except XiangqiError:
            self._forget_position()
            self._revert(self.move_history.pop())
            raise

        self.log_debug("第%d步 %s", self.move_count, legal_move)
        if self.is_over:
            self.log_info("对局结束: %s", self.result)
        return self

    def undo(self) -> 'GameState':
        """
        撤销上一步走法

        Returns:
            GameState: 自身

        Raises:
            NoHistoryError: 没有可撤销的走法
        """
        if not self.move_history:
            raise NoHistoryError()

        self._forget_position()
        move = self.move_history.pop()
        self._revert(move)

        # 终局状态不可能出现在历史中，悔棋后的局面总是进行中
        self.result = GameResult.ongoing()
        self.log_debug("悔棋 %s", move)
        return self

    # ==================== 内部方法 ====================

    def _position_key(self) -> Tuple[str, PlayerSide]:
        return self.board.signature(), self.turn

    def _revert(self, move: Move):
        self.board.move_piece(move.to_pos, move.from_pos)
        if move.captured_piece is not None:
            self.board.place_piece(move.captured_piece)
        self.turn = self.turn.opponent

    def _forget_position(self):
        key = self._position_key()
        self.position_counts[key] -= 1
        if self.position_counts[key] <= 0:
            del self.position_counts[key]

    def _evaluate_result(self) -> GameResult:
        """按将死、困毙、重复局面的顺序判定当前走子方的结果"""
        engine = self.rule_engine
        # 帅/将被吃掉等同于被将死
        if not self.board.has_general(self.turn):
            return GameResult.checkmate(self.turn.opponent)

        if not engine.has_legal_move(self.board, self.turn):
            if engine.is_in_check(self.board, self.turn):
                return GameResult.checkmate(self.turn.opponent)
            return GameResult(GameStatus.STALEMATE)

        if self.draw_by_repetition and self.repetition_count() >= self.repetition_limit:
            return GameResult(GameStatus.DRAW_BY_REPETITION)

        return GameResult.ongoing()
