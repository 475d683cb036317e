from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional

from badugi.ai import EXCHANGE_DELAY, action_delay, get_ai_betting_action, get_ai_card_exchange, profile_for
from badugi.betting import betting_options, process_betting_action
from badugi.cards import parse_label
from badugi.errors import BadugiError, InvalidAction
from badugi.evaluator import describe_hand, evaluate_hand
from badugi.exchange import exchange_cards
from badugi.game import create_game_state, start_new_round
from badugi.models import ActionType, GameSettings, GameState, Phase, Player

LOGGER = logging.getLogger("badugi_console")

Prompt = Callable[[str], Awaitable[str]]
Output = Callable[[str], None]

# TableSession owns the only copy of the snapshot and is the single writer:
# one move is applied at a time, the computer's move only after its delay.

_SHORTCUTS = {
    "f": ActionType.FOLD,
    "k": ActionType.CHECK,
    "c": ActionType.CALL,
    "r": ActionType.RAISE,
}


async def stdin_prompt(text: str) -> str:
    return await asyncio.to_thread(input, text)


def render_table(state: GameState, viewer_id: str) -> str:
    lines = [f"[{state.phase.value}] pot {state.pot}  bet {state.current_bet}  exchanges left {state.exchanges_remaining}"]
    for player in state.players:
        marker = ">" if player.is_turn else " "
        status = " (folded)" if player.folded else ""
        lines.append(f"{marker} {player.name}: {player.chips} chips, bet {player.current_bet}{status}")
    viewer = state.player(viewer_id)
    if viewer.hand:
        cards = " ".join(f"{idx}:{card.symbol}" for idx, card in enumerate(viewer.hand, start=1))
        lines.append(f"  Your hand {cards}  ({describe_hand(evaluate_hand(viewer.hand))})")
    return "\n".join(lines)


def describe_event(state: GameState, event: dict) -> Optional[str]:
    ev = event["ev"]
    seat = event.get("seat")
    name = state.players[seat].name if isinstance(seat, int) else ""
    if ev == "FOLD":
        return f"{name} folds"
    if ev == "CHECK":
        return f"{name} checks"
    if ev == "CALL":
        return f"{name} calls {event['amount']}" + (" (all-in)" if event.get("all_in") else "")
    if ev == "RAISE":
        return f"{name} raises to {event['amount']}" + (" (all-in)" if event.get("all_in") else "")
    if ev == "REFUND":
        return f"{name} takes back {event['amount']} uncalled"
    if ev == "EXCHANGE":
        return f"{name} draws {event['count']}" if event["count"] else f"{name} stands pat"
    if ev == "PHASE":
        return f"-- {event['phase']} --"
    if ev == "SHOWDOWN":
        return f"{name} shows {' '.join(event['hand'])}: {event['rank']}"
    if ev == "POT_AWARD":
        return f"{name} wins {event['amount']}"
    return None


class TableSession:
    """Plays hands between the human seat and the computer in a terminal."""

    def __init__(
        self,
        settings: GameSettings,
        *,
        seed: Optional[int] = None,
        prompt: Prompt = stdin_prompt,
        output: Output = print,
        delay_scale: float = 1.0,
        autoplay: bool = False,
    ) -> None:
        self.rng = random.Random(seed)
        self.state = create_game_state(settings, self.rng)
        self.profile = profile_for(settings.ai_difficulty)
        self.prompt = prompt
        self.output = output
        self.delay_scale = delay_scale
        self.autoplay = autoplay
        self._seen_events = 0

    async def run(self, hands: int = 1) -> GameState:
        for _ in range(hands):
            try:
                self.state = start_new_round(self.state, self.rng)
            except InvalidAction as exc:
                self.output(exc.msg)
                break
            self._seen_events = 0
            await self.play_hand()
        return self.state

    async def play_hand(self) -> None:
        while self.state.phase != Phase.GAME_OVER:
            self._narrate()
            player = self.state.current_player
            if player.is_ai or self.autoplay:
                await self._computer_turn(player)
            else:
                await self._human_turn(player)
        self._narrate()
        chips = ", ".join(f"{p.name} {p.chips}" for p in self.state.players)
        self.output(f"Hand over. Chips: {chips}")

    def _narrate(self) -> None:
        for event in self.state.events[self._seen_events :]:
            line = describe_event(self.state, event)
            if line:
                self.output(line)
        self._seen_events = len(self.state.events)

    async def _pause(self, seconds: float) -> None:
        if self.delay_scale > 0:
            await asyncio.sleep(seconds * self.delay_scale)

    async def _computer_turn(self, player: Player) -> None:
        if self.state.phase == Phase.CARD_EXCHANGE:
            discards = get_ai_card_exchange(player, self.profile)
            await self._pause(EXCHANGE_DELAY)
            self.state = exchange_cards(self.state, player.id, discards)
            return
        decision = get_ai_betting_action(self.state, player, self.profile, self.rng)
        await self._pause(action_delay(decision.action, self.rng))
        LOGGER.debug("%s decided %s %s", player.name, decision.action.value, decision.amount)
        self.state = process_betting_action(self.state, player.id, decision.action, decision.amount)

    async def _human_turn(self, player: Player) -> None:
        self.output(render_table(self.state, player.id))
        if self.state.phase == Phase.CARD_EXCHANGE:
            text = "Discard (card numbers or labels, blank to stand pat): "
        else:
            options = betting_options(self.state, player.id)
            text = "Action [" + "/".join(a.value for a in options.legal) + "]"
            if options.min_raise_to is not None:
                text += f" raise {options.min_raise_to}-{options.max_raise_to}"
            text += ": "
        line = (await self.prompt(text)).strip()
        try:
            self.state = self._apply_command(player, line)
        except (BadugiError, ValueError) as exc:
            self.output(f"! {getattr(exc, 'msg', exc)}")

    def _apply_command(self, player: Player, line: str) -> GameState:
        if self.state.phase == Phase.CARD_EXCHANGE:
            return exchange_cards(self.state, player.id, self._parse_discards(player, line))

        parts = line.lower().split()
        if not parts:
            options = betting_options(self.state, player.id)
            action = ActionType.CHECK if ActionType.CHECK in options.legal else ActionType.CALL
            return process_betting_action(self.state, player.id, action)
        action = _SHORTCUTS.get(parts[0], parts[0])
        amount = int(parts[1]) if len(parts) > 1 else None
        return process_betting_action(self.state, player.id, action, amount)

    @staticmethod
    def _parse_discards(player: Player, line: str) -> List[str]:
        ids = []
        for token in line.replace(",", " ").split():
            if token == "-":
                continue
            if token.isdigit():
                idx = int(token) - 1
                if not 0 <= idx < len(player.hand):
                    raise ValueError(f"No card at position {token}")
                ids.append(player.hand[idx].id)
            else:
                ids.append(parse_label(token).id)
        return ids
