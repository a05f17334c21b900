#!/usr/bin/env python3
"""
Xiangqi Engine 主入口文件

提供命令行接口来查看合法走法、按坐标记法走子和检查局面。
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from xiangqi_project import __version__, __description__
from xiangqi_project.src.xiangqi_engine.config import ConfigManager, GameConfig, SystemConfig
from xiangqi_project.src.xiangqi_engine.rules_engine import (
    Board, BoardValidator, GameState, Move, PlayerSide
)
from xiangqi_project.src.xiangqi_engine.rules_engine.geometry import BOARD_COLUMNS, BOARD_ROWS
from xiangqi_project.src.xiangqi_engine.utils import XiangqiError, configure_logging

console = Console()


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("♜ Xiangqi Engine ♜\n", style="bold red")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="中国象棋规则引擎",
        title_align="center",
        border_style="red",
        padding=(1, 2)
    )
    console.print(panel)


def render_board(board: Board) -> Text:
    """把棋盘渲染为带颜色的文字，红方棋子为红色"""
    text = Text("   a  b  c  d  e  f  g  h  i\n", style="dim")
    for y in range(BOARD_ROWS):
        text.append(f"{y}  ", style="dim")
        for x in range(BOARD_COLUMNS):
            piece = board.piece_at((x, y))
            if piece is None:
                text.append("· ", style="dim")
            else:
                style = "bold red" if piece.side is PlayerSide.RED else "bold cyan"
                text.append(piece.glyph, style=style)
            if x < BOARD_COLUMNS - 1:
                text.append(" ")
        text.append("\n")
        if y == BOARD_ROWS // 2 - 1:
            text.append("   " + "~" * 26 + "\n", style="blue")
    return text


def load_state(fen: Optional[str], game_config: GameConfig) -> GameState:
    """从FEN或标准开局创建对局状态"""
    options = {
        'draw_by_repetition': game_config.draw_by_repetition,
        'repetition_limit': game_config.repetition_limit,
    }
    if fen:
        return GameState.from_fen(fen, **options)
    return GameState.new_game(**options)


def print_state(state: GameState):
    """打印棋盘、走子方和对局结果"""
    console.print(Panel(render_board(state.board), title="棋盘", border_style="yellow"))
    console.print(f"FEN: {state.to_fen()}", markup=False)
    console.print(f"走子方: {state.turn.display_name}")
    if state.is_in_check() and not state.is_over:
        console.print("[bold yellow]将军![/bold yellow]")
    style = "bold green" if state.is_over else "white"
    console.print(f"[{style}]结果: {state.result}[/{style}]")


@click.group()
@click.version_option(version=__version__, prog_name="Xiangqi Engine")
@click.option('--debug', is_flag=True, help='启用调试模式')
@click.option('--config', type=click.Path(exists=True, file_okay=False), help='配置目录路径')
@click.pass_context
def cli(ctx: click.Context, debug: bool, config: Optional[str]):
    """中国象棋规则引擎 - 走法生成、将军检测、终局判定"""
    if config:
        manager = ConfigManager(config, create_defaults=False)
        game_config = manager.get_game_config()
        system_config = manager.get_system_config()
        console.print(f"[green]使用配置目录: {config}[/green]")
    else:
        game_config = GameConfig()
        system_config = SystemConfig()

    debug = debug or system_config.enable_debug_mode
    configure_logging(system_config, debug)
    if debug:
        console.print("[yellow]调试模式已启用[/yellow]")

    ctx.obj = {'game_config': game_config, 'system_config': system_config}


@cli.command()
@click.pass_context
def info(ctx: click.Context):
    """显示引擎信息和当前配置"""
    print_banner()

    game_config: GameConfig = ctx.obj['game_config']
    rules_text = Text()
    rules_text.append("📜 对局规则\n", style="bold yellow")
    rules_text.append("• 重复局面和棋: ", style="white")
    rules_text.append(f"{'启用' if game_config.draw_by_repetition else '关闭'}"
                      f" (第{game_config.repetition_limit}次出现)\n", style="green")
    rules_text.append("• 悔棋: ", style="white")
    rules_text.append(f"{'允许' if game_config.allow_undo else '禁止'}\n", style="green")
    rules_text.append("• 每方用时: ", style="white")
    rules_text.append(f"{game_config.initial_time:.0f} 秒\n", style="green")

    console.print(Panel(rules_text, title="配置", border_style="yellow"))


@cli.command()
@click.option('--fen', type=str, default=None, help='起始局面FEN，缺省为标准开局')
@click.option('--side', type=click.Choice(['red', 'black']), default=None, help='指定一方，缺省为走子方')
@click.pass_context
def moves(ctx: click.Context, fen: Optional[str], side: Optional[str]):
    """列出合法走法"""
    try:
        state = load_state(fen, ctx.obj['game_config'])
    except XiangqiError as e:
        console.print(Text(str(e), style="red"))
        sys.exit(1)

    player = PlayerSide[side.upper()] if side else state.turn
    legal_moves = state.legal_moves(player)

    table = Table(title=f"{player.display_name}合法走法")
    table.add_column("走法", style="cyan")
    table.add_column("棋子")
    table.add_column("吃子", style="red")
    for move in legal_moves:
        table.add_row(
            move.to_coordinate_notation(),
            move.piece.glyph if move.piece else "",
            move.captured_piece.glyph if move.captured_piece else ""
        )

    console.print(table)
    console.print(f"共 {len(legal_moves)} 个合法走法")


@cli.command()
@click.argument('move_list', nargs=-1)
@click.option('--fen', type=str, default=None, help='起始局面FEN，缺省为标准开局')
@click.pass_context
def play(ctx: click.Context, move_list: Tuple[str, ...], fen: Optional[str]):
    """按坐标记法依次走子，如: play h7e7 h0g2"""
    try:
        state = load_state(fen, ctx.obj['game_config'])
        for notation in move_list:
            state.apply_move(Move.from_coordinate_notation(notation))
    except XiangqiError as e:
        console.print(Text(str(e), style="red"))
        sys.exit(1)

    print_state(state)


@cli.command()
@click.argument('fen')
def validate(fen: str):
    """检查FEN局面是否合法"""
    try:
        board = Board.from_fen(fen)
    except XiangqiError as e:
        console.print(Text(str(e), style="red"))
        sys.exit(1)

    report = BoardValidator().get_validation_report(board, GameState.turn_from_fen(fen))

    table = Table(title="局面验证")
    table.add_column("检查项")
    table.add_column("结果")
    table.add_column("错误")
    for name, result in report['validations'].items():
        table.add_row(
            name,
            "[green]通过[/green]" if result['valid'] else "[red]失败[/red]",
            "\n".join(result['errors'])
        )
    console.print(table)

    if not report['overall_valid']:
        console.print(f"[red]发现 {report['total_errors']} 个错误[/red]")
        sys.exit(1)
    console.print("[green]局面合法[/green]")


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
