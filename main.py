"""Entry point for the awakening stone planner."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

import pygame

from awakening.engine.logger import PlannerChannels, init_logger
from awakening.engine.settings import SETTINGS_PATH, PlannerSettings
from awakening.planner.model import AwakeningPlannerModel
from awakening.planner.optimizer import PreferenceMode
from awakening.ui.advice import AdvisorClient
from awakening.ui.planner_scene import PlannerScene
from awakening.ui.report import format_plan


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Plan awakening stone spending.")
    parser.add_argument("--settings", type=Path, default=SETTINGS_PATH)
    parser.add_argument("--headless", action="store_true", help="print the plan instead of opening a window")
    parser.add_argument("--name", dest="character_name", help="character shown in the report")
    parser.add_argument("--current", type=int)
    parser.add_argument("--target", type=int)
    parser.add_argument("--character", "--character-stones", dest="character_stones", help="character stones held")
    parser.add_argument("--universal", "--universal-stones", dest="universal_stones", help="universal stones held")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in PreferenceMode],
        help="optimal saves universal stones, uni_priority keeps character stones",
    )
    return parser


def build_model(args: argparse.Namespace, settings: PlannerSettings, logger=None) -> AwakeningPlannerModel:
    defaults = settings.planner
    model = AwakeningPlannerModel(
        character=args.character_name if args.character_name is not None else defaults.character,
        current_level=defaults.current_level,
        target_level=defaults.target_level,
        character_stones=defaults.character_stones,
        universal_stones=defaults.universal_stones,
        mode=defaults.mode,
        logger=logger,
    )
    if args.current is not None:
        model.set_current_level(args.current)
    if args.target is not None:
        model.set_target_level(args.target)
    if args.character_stones is not None:
        model.set_character_stones(args.character_stones)
    if args.universal_stones is not None:
        model.set_universal_stones(args.universal_stones)
    if args.mode is not None:
        model.set_mode(args.mode)
    return model


def run_headless(model: AwakeningPlannerModel) -> List[str]:
    lines = format_plan(model.plan(), model.mode, character=model.character)
    for line in lines:
        print(line)
    return lines


def run_window(model: AwakeningPlannerModel, settings: PlannerSettings, channels: PlannerChannels) -> None:
    pygame.init()
    screen = pygame.display.set_mode(settings.resolution)
    pygame.display.set_caption("Awakening Stone Planner")
    clock = pygame.time.Clock()

    advisor = None
    if settings.advisor.endpoint:
        advisor = AdvisorClient(
            settings.advisor.endpoint,
            timeout=settings.advisor.timeout,
            max_attempts=settings.advisor.max_attempts,
            base_delay=settings.advisor.base_delay,
            logger=channels.advisor,
        )
    scene = PlannerScene(model, advisor=advisor, logger=channels.ui)
    scene.on_enter()

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                scene.handle_event(event)
            dt = clock.tick(settings.max_fps) / 1000.0
            scene.update(dt)
            scene.render(screen, 0.0)
            pygame.display.flip()
    finally:
        scene.on_exit()
        pygame.quit()


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = PlannerSettings.load(args.settings)
    channels = init_logger(settings.log)
    model = build_model(args, settings, channels.optimizer)
    if args.headless:
        run_headless(model)
        return
    run_window(model, settings, channels)


if __name__ == "__main__":
    main()
