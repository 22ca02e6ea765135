"""
User interface module for the arena.

Provides a console stepper that plays a match one action at a time, letting
the user make the next combatant take cover, run, sprint or switch fire
mode before it acts.
"""

from typing import Any

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from arena.combat.actions import change_fire_mode, sprint, start_running, take_cover
from arena.combat.combat_manager import MatchState, resolve_next_action
from arena.combat.initiative import next_actor
from arena.core.constants import FireMode
from arena.core.error_handling import InvalidInput
from arena.core.sheets import get_status_line, print_round_result
from arena.core.utils import ccapture, cprint, crule
from arena.items.weapon import RangedWeapon

COMMANDS: list[tuple[str, str]] = [
    ("n", "Next action"),
    ("c", "Take cover"),
    ("r", "Start running"),
    ("s", "Sprint"),
    ("f", "Change fire mode"),
    ("e", "Run to the end"),
    ("q", "Quit"),
]


class MatchStepper:
    """
    Command-line stepper for a running match.

    Uses Rich tables for the menus and prompt_toolkit for the input, like
    the rest of the console tools.
    """

    def __init__(
        self,
        state: MatchState,
        verbose_level: int = 1,
        session: PromptSession | None = None,
    ) -> None:
        """
        Initialize the stepper.

        Args:
            state (MatchState): The match to play.
            verbose_level (int): Detail printed for each action.
            session (PromptSession | None): The prompt session. One is
                created on first use when None.

        """
        self.state = state
        self.verbose_level = verbose_level
        self._session = session

    @property
    def session(self) -> PromptSession:
        # one session keeps history
        if self._session is None:
            self._session = PromptSession(erase_when_done=True)
        return self._session

    def print_status(self) -> None:
        """Prints the condition monitors of every combatant."""
        crule(f"Round {self.state.round_number}")
        for combatant in self.state.combatants:
            cprint(f"    {get_status_line(combatant)}")

    def choose_command(self) -> str:
        """
        Asks the user what to do next.

        Returns:
            str: The key of the chosen command.

        """
        actor = next_actor(self.state.combatants)
        title = f"Next: {actor.colored_name}" if actor else "Next: new round"
        table = Table(title=title, pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Command", style="bold")
        for key, label in COMMANDS:
            table.add_row(key, label)
        prompt = "\n" + ccapture(table) + "\nCommand > "
        keys = {key for key, _ in COMMANDS}
        while True:
            answer = self.session.prompt(ANSI(prompt)).strip().lower()
            if answer in keys:
                return answer

    def choose_fire_mode(self, weapon: RangedWeapon) -> FireMode | None:
        """
        Asks the user for a fire mode of a weapon.

        Args:
            weapon (RangedWeapon): The weapon to configure.

        Returns:
            FireMode | None: The chosen mode, or None to go back.

        """
        table = Table(title=weapon.name, pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Mode", style="bold")
        table.add_column("Shots", justify="right")
        for i, mode in enumerate(weapon.fire_modes, 1):
            table.add_row(str(i), mode.display_name, str(mode.shots))
        table.add_row()
        table.add_row("q", "Back", "")
        prompt = "\n" + ccapture(table) + "\nMode > "
        while True:
            answer = self.session.prompt(ANSI(prompt))
            if answer.lower() == "q":
                return None
            index = self.get_digit_choice(answer) - 1
            if 0 <= index < len(weapon.fire_modes):
                return weapon.fire_modes[index]

    def apply_free_action(self, command: str) -> None:
        """
        Applies a free action to the combatant about to act.

        Args:
            command (str): The command key.

        """
        actor = next_actor(self.state.combatants)
        if actor is None:
            cprint("    [yellow]Nobody can act before the new round.[/]")
            return
        try:
            if command == "c":
                if self.state.game_map is None:
                    cprint("    [yellow]There is no map to take cover on.[/]")
                    return
                cprint(f"    {take_cover(actor, self.state.game_map)}")
            elif command == "r":
                cprint(f"    {start_running(actor)}")
            elif command == "s":
                _, message = sprint(actor, self.state.roller)
                cprint(f"    {message}")
            elif command == "f":
                if not actor.ranged_weapons:
                    cprint(f"    [yellow]{actor.name} has no ranged weapon.[/]")
                    return
                weapon = actor.ranged_weapons[0]
                mode = self.choose_fire_mode(weapon)
                if mode is not None:
                    cprint(f"    {change_fire_mode(weapon, mode)}")
        except InvalidInput as e:
            cprint(f"    [red]{e.message}[/]")

    def run(self) -> None:
        """Plays the match until it ends or the user quits."""
        for line in self.state.opening_log:
            cprint(f"    {line}")
        ended = self.state.is_over
        while not ended:
            self.print_status()
            command = self.choose_command()
            if command == "q":
                return
            if command == "e":
                while not ended:
                    _, result, ended = resolve_next_action(self.state)
                    print_round_result(result, self.verbose_level)
            elif command == "n":
                _, result, ended = resolve_next_action(self.state)
                print_round_result(result, self.verbose_level)
            else:
                self.apply_free_action(command)
        result = self.state.to_result()
        crule("Match over")
        cprint(f"    {result.details}")

    @staticmethod
    def get_digit_choice(answer: Any) -> int:
        """
        Convert a single digit string input to its integer value.

        Args:
            answer (Any): User input string to parse.

        Returns:
            int: The integer value of the digit (0-9), or -1 if invalid input.

        """
        if isinstance(answer, str) and len(answer) == 1 and answer.isdigit():
            return int(answer)
        return -1
