"""Entry point for the Chainfall falling-block game.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import argparse
import random

from arcade import Window, run, set_background_color, color
from chainfall.constants import DEFAULT_DT
from chainfall.world import create_world
from chainfall.events.bus import EVENT_KEY_PRESS, EVENT_NEW_GAME_REQUEST, EVENT_TICK, EventBus
from chainfall.systems.chain_resolver import ChainResolverSystem
from chainfall.systems.game_flow_system import GameFlowSystem
from chainfall.systems.input import InputSystem
from chainfall.systems.piece_controller import PieceControllerSystem
from chainfall.systems.progression_system import ProgressionSystem
from chainfall.systems.render import RenderSystem
from chainfall.systems.scheduler import SchedulerSystem
from chainfall.utils.logging import setup_logger


class ChainfallWindow(Window):
    def __init__(self, *, seed: int | None = None):
        super().__init__(640, 700, "Chainfall", resizable=True)
        self.set_update_rate(DEFAULT_DT)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, rng=random.Random(seed))

        # Lifecycle and progression
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus)
        self.progression_system = ProgressionSystem(self.world, self.event_bus)

        # Board, pieces and chain resolution
        self.chain_resolver_system = ChainResolverSystem(self.world, self.event_bus)
        self.piece_controller_system = PieceControllerSystem(self.world, self.event_bus)
        self.scheduler_system = SchedulerSystem(self.world, self.event_bus)

        # Interface systems
        self.input_system = InputSystem(self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.BLACK)
        self.event_bus.emit(EVENT_NEW_GAME_REQUEST)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    parser = argparse.ArgumentParser(description="Falling-block puzzle with gravity chains.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece randomizer")
    parser.add_argument("--log-level", default="info", help="debug, info, warning, ...")
    args = parser.parse_args()
    setup_logger(name="chainfall", level=args.log_level)
    ChainfallWindow(seed=args.seed)
    run()

if __name__ == "__main__":
    main()
