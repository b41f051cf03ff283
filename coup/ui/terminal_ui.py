from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.columns import Columns
from rich.align import Align
from rich.box import ROUNDED
from rich import box
from coup.models.game_state import Game
from coup.models.player import Player
from coup.models.card import CardColor

_console = Console()


def print_search_result(stats: List[Dict], transposition_hits: int, prunings: int,
                        console: Optional[Console] = None) -> None:
    """Print the ranked root children of the last search."""
    console = console or _console
    if not stats:
        console.print("[yellow]No valid moves available.[/yellow]")
    else:
        table = Table(title="Search Result", box=box.SIMPLE_HEAVY)
        table.add_column("#", justify="right")
        table.add_column("Action")
        table.add_column("Visits", justify="right")
        table.add_column("Reward", justify="right")
        table.add_column("UCB1", justify="right")
        for i, s in enumerate(stats, 1):
            style = "bold green" if i == 1 else None
            table.add_row(
                str(i),
                str(s['action']),
                str(s['visits']),
                str(s['reward']),
                f"{s['ucb1']:.3f}",
                style=style,
            )
        console.print(table)
    console.print(f"Transposition table used {transposition_hits} times")
    console.print(f"Pruning applied {prunings} times")


class TerminalUI:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or _console
        self.total_width = 88
        self.player_height = 5
        self.actions_height = 3

    def create_player_panel(self, player: Player, reveal: bool, is_turn: bool) -> Panel:
        """Create a panel showing a player's coins and influence"""
        cards = []
        for card in player.cards:
            color = CardColor[card]
            if reveal:
                cards.append(f"[bold {color}]{card}[/bold {color}]")
            else:
                cards.append("[dim]??????[/dim]")
        for card in player.lost_cards:
            cards.append(f"[strike dim]{card}[/strike dim]")

        content = f"[yellow]Coins: {player.coins}[/yellow]\n" + "  ".join(cards)
        title = f"[bold]{player.name}[/bold]" + (" [green]*[/green]" if is_turn else "")
        border = "green" if player.is_active else "red"
        return Panel(
            content,
            title=title,
            border_style=border,
            box=ROUNDED,
            width=self.total_width // 2 - 1,
            height=self.player_height,
        )

    def print_players_panel(self, game: Game, reveal_all: bool):
        current = game.current_player
        panels = [
            self.create_player_panel(
                p,
                reveal=reveal_all or not p.is_ai,
                is_turn=current is not None and current.name == p.name,
            )
            for p in game.players
        ]
        header = Panel(
            Columns(panels, padding=0),
            title=f"[bold]Coup[/bold]  [blue]Deck: {len(game.deck)}[/blue]",
            box=ROUNDED,
            width=self.total_width,
        )
        self.console.print(header)

    def print_game_over_panel(self, game: Game):
        winners = game.active_players
        content = f"{winners[0].name} wins" if winners else "No winner"
        color = "green" if winners and not winners[0].is_ai else "red"
        self.console.print(Panel(
            Align.center(f"[bold {color}]{content}[/bold {color}]", vertical="middle"),
            title="Game Over",
            border_style=color,
            box=ROUNDED,
            width=self.total_width,
            height=self.actions_height,
        ))

    def print_actions_panel(self, game: Game, actions_override: Optional[str], actions_title: str):
        if actions_override is not None:
            content = actions_override
        else:
            options = []
            player = game.current_player
            if player is not None:
                for i, action in enumerate(game.available_actions(player), 1):
                    options.append(f"[bold white]{i}[/bold white] {action}")
            content = "Commands: " + ", ".join(options)
        self.console.print(Panel(
            content,
            title=f"[bold]{actions_title}[/bold]",
            box=ROUNDED,
            padding=(0, 1),
            width=self.total_width,
        ))

    def display_game_state(
        self,
        game: Game,
        actions_override: Optional[str] = None,
        actions_title: str = "Actions",
        reveal_all: bool = False,
        clear: bool = True,
    ):
        """Display the table, then either the result or the available actions"""
        if clear:
            self.console.clear()
        self.print_players_panel(game, reveal_all or game.game_over)
        if game.game_over:
            self.print_game_over_panel(game)
            return
        self.print_actions_panel(game, actions_override, actions_title)
