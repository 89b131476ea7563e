"""
MyoScribe - Main Entry Point.
=============================

This module serves as the central bootloader for the MyoScribe system.
It orchestrates the "Layer Cake" architecture by:
1. Opening the Event Hub (a recorded or synthetic armband session).
2. Spawning the Cognition Engine (GestureDecoder).
3. Linking the Control Nervous System (MyoController).
4. Rendering the Feedback Loop (HUD).

Usage:
    Replay a recorded session:
    $ python -m myoscribe.main data/sessions/hello.csv

    Spell a word from a synthetic session:
    $ python -m myoscribe.main --spell hi --overlay
"""
import argparse
import logging
from typing import Optional

import cv2

from myoscribe.config import CONFIG, init_environment
from myoscribe.control.controller import MyoController
from myoscribe.core.interfaces import IEventSource
from myoscribe.hub import RecordedHub, ReplayHub
from myoscribe.synth import synthesize_word
from myoscribe.ui.hud import ConsoleHUD, OverlayHUD

def run_loop(hub: IEventSource, pilot: MyoController,
             hud: Optional[ConsoleHUD] = None,
             overlay: Optional[OverlayHUD] = None) -> str:
    """
    Main Event Loop: drain one time slice, handle it, render.
    Returns the word assembled when the hub runs dry.
    """
    slice_ms = 1000 / CONFIG["POLL_HZ"]
    window_name = "MyoScribe"

    while not hub.exhausted:
        # --- 1. EVENTS (ordered, one slice) ---
        for event in hub.run(slice_ms):
            pilot.process(event)

        # --- 2. FEEDBACK ---
        if hud is not None:
            hud.render(pilot)
        if overlay is not None:
            cv2.imshow(window_name, overlay.render(pilot))
            if cv2.waitKey(1) == 27: break # ESC

    return pilot.decoder.word

def main(argv=None):
    parser = argparse.ArgumentParser(description="MyoScribe: orientation gestures to words")
    parser.add_argument("session", nargs="?", help="Recorded session CSV to replay")
    parser.add_argument("--spell", help="Replay a synthetic session spelling this word")
    parser.add_argument("--fast", action="store_true", help="Do not pace the replay in real time")
    parser.add_argument("--overlay", action="store_true", help="Show the OpenCV overlay")
    args = parser.parse_args(argv)

    # 1. Boot Sequence
    logging.basicConfig(level=CONFIG["LOG_LEVEL"], format="%(levelname)s %(message)s")
    init_environment()
    print("🚀 MYOSCRIBE: ONLINE")

    # 2. Initialize Subsystems
    pilot = MyoController()
    if args.spell:
        events = synthesize_word(args.spell, pilot.decoder.table)
        hub = RecordedHub(events, realtime=not args.fast)
    elif args.session:
        hub = ReplayHub.from_csv(args.session, realtime=not args.fast)
    else:
        parser.error("give a session CSV or --spell WORD")

    overlay = OverlayHUD() if args.overlay else None
    try:
        word = run_loop(hub, pilot, ConsoleHUD(), overlay)
    finally:
        if overlay is not None:
            cv2.destroyAllWindows()
    print(f"\n📝 WORD: {word!r}")
    print("🔴 SYSTEM OFFLINE")

if __name__ == "__main__":
    main()
