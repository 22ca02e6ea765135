"""
Module for printing characters, combatants and results in a formatted way.
"""

from rich.table import Table

from arena.character.combatant import Combatant
from arena.character.main import Character
from arena.combat.batch import BatchResult
from arena.combat.damage import wound_modifier
from arena.combat.initiative import display_initiative
from arena.combat.results import MatchResult, RoundResult
from arena.core.constants import DRAW, Faction
from arena.core.utils import cprint, crule, format_rolls, monitor_boxes
from arena.items.weapon import MeleeWeapon, RangedWeapon


def print_weapon_sheet(weapon: MeleeWeapon | RangedWeapon, padding: int = 2) -> None:
    """
    Prints the details of a weapon in a formatted way.

    Args:
        weapon (MeleeWeapon | RangedWeapon): The weapon to display.
        padding (int): The number of spaces to indent the output.

    """
    pad = " " * padding
    damage = weapon.damage_type.colorize(f"{weapon.damage}{weapon.damage_type.value}")
    line = f"{pad}[bold]{weapon.name}[/] DV {damage}, AP {weapon.ap:+d}, Acc {weapon.accuracy}"
    if isinstance(weapon, MeleeWeapon):
        line += f", Reach {weapon.reach}"
    else:
        modes = "/".join(mode.value for mode in weapon.fire_modes)
        line += f", {weapon.weapon_type.value}, {modes}, RC {weapon.recoil_compensation}"
        if weapon.ammo is not None:
            line += f", Ammo {weapon.ammo}/{weapon.ammo_capacity}"
    cprint(line)


def print_character_sheet(character: Character) -> None:
    """
    Prints the details of a character in a formatted way.

    Args:
        character (Character): The character to display.

    """
    cprint(f"[bold]{character.name}[/], [blue]{character.metatype.value}[/]")
    attributes = character.attributes
    cprint(
        f"  BOD {attributes.body}, AGI {attributes.agility}, REA {attributes.reaction}, "
        f"STR {attributes.strength}, WIL {attributes.willpower}, LOG {attributes.logic}, "
        f"INT {attributes.intuition}, CHA {attributes.charisma}"
    )
    skills = character.skills
    cprint(
        f"  Firearms {skills.firearms}, Close combat {skills.close_combat}, "
        f"Running {skills.running}, Armor {skills.armor}"
    )
    cprint(
        f"  Limits: physical [yellow]{character.physical_limit}[/], "
        f"mental [cyan]{character.mental_limit}[/], "
        f"initiative dice {character.initiative_dice}"
    )
    if character.weapons:
        cprint("  [blue]Weapons[/]:")
        for weapon in character.weapons:
            print_weapon_sheet(weapon, 4)


def get_status_line(combatant: Combatant) -> str:
    """
    Returns a compact line with the condition monitors of a combatant.

    Args:
        combatant (Combatant): The combatant to describe.

    Returns:
        str: Name, bars and initiative, with rich markup.

    """
    physical = monitor_boxes(combatant.physical_damage, combatant.max_physical, "red")
    stun = monitor_boxes(combatant.stun_damage, combatant.max_stun, "yellow")
    line = (
        f"{combatant.colored_name} P {physical} "
        f"{combatant.physical_damage:>2}/{combatant.max_physical} "
        f"S {stun} {combatant.stun_damage:>2}/{combatant.max_stun} "
        f"Ini {display_initiative(combatant)}"
    )
    wounds = wound_modifier(combatant)
    if wounds:
        line += f" [red](-{wounds})[/]"
    if not combatant.is_alive:
        line += " [bold red]DEAD[/]"
    elif not combatant.is_conscious:
        line += " [yellow]UNCONSCIOUS[/]"
    return line


def print_round_result(result: RoundResult, verbose_level: int = 0) -> None:
    """
    Prints the record of one action.

    Args:
        result (RoundResult): The action to display.
        verbose_level (int): 0 prints a summary, 1 adds the narration,
            2 adds the raw dice.

    """
    if not result.acting_character:
        for message in result.messages:
            cprint(f"    [dim]{message}[/]")
        return
    style = "red" if result.glitch else "white"
    cprint(f"    [{style}]{result.summary}[/]")
    if verbose_level >= 1:
        for message in result.messages:
            cprint(f"      {message}")
    if verbose_level >= 2:
        cprint(
            f"      [dim]A: {format_rolls(result.attack_rolls)} | "
            f"D: {format_rolls(result.defense_rolls)} | "
            f"R: {format_rolls(result.resistance_rolls)}[/]"
        )
    for change in result.status_changes:
        cprint(f"      [magenta]{change}[/]")


def _winner_label(winner: str) -> str:
    if winner == DRAW:
        return "[yellow]Draw[/]"
    return Faction(winner).colored_name


def print_match_result(result: MatchResult, verbose_level: int = 0) -> None:
    """
    Prints the record of a whole match.

    Args:
        result (MatchResult): The match to display.
        verbose_level (int): Detail passed on to each action.

    """
    crule("Match")
    for round_result in result.round_results:
        print_round_result(round_result, verbose_level)
    cprint(f"  Winner: {_winner_label(result.winner)}")
    cprint(f"  {result.details}")


def print_batch_summary(batch: BatchResult) -> None:
    """
    Prints the win counts of a batch as a table.

    Args:
        batch (BatchResult): The batch to summarize.

    """
    table = Table(title="Batch results")
    table.add_column("Outcome", style="bold")
    table.add_column("Matches", justify="right")
    table.add_column("Rate", justify="right")
    for outcome, count in batch.win_counts.items():
        table.add_row(
            _winner_label(outcome),
            str(count),
            f"{batch.win_rate(outcome):.1%}",
        )
    cprint(table)
    if batch.match_results:
        average = sum(r.rounds for r in batch.match_results) / len(batch.match_results)
        cprint(f"  Average match length: {average:.1f} rounds")
    if batch.failed_matches:
        cprint(f"  [red]{len(batch.failed_matches)} match(es) failed.[/]")
