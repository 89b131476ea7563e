"""
MyoScribe Session Synthesizer (The Studio).

Writes a CSV session that spells a word, for replaying through the runtime
without an armband.

Usage:
    python tools/synth_session.py hi
    python tools/synth_session.py hi --dispatch fingersSpread --out data/sessions/hi.csv
"""

import argparse
import sys
import os

# --- PATH SETUP ---
# Add project root to path to allow importing from myoscribe
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from myoscribe.config import PATHS, init_environment
from myoscribe.core.types import Pose
from myoscribe.gesture_engine import load_letter_table
from myoscribe.hub import save_session_csv
from myoscribe.synth import synthesize_word

def main():
    parser = argparse.ArgumentParser(description="Synthesize an armband session spelling WORD")
    parser.add_argument("word")
    parser.add_argument("--dispatch", default=None, help="Pose to send after the word (e.g. fingersSpread)")
    parser.add_argument("--out", default=None, help="Output CSV (default: data/sessions/<word>.csv)")
    args = parser.parse_args()

    init_environment()
    out = args.out or str(PATHS["SESSIONS_DIR"] / f"{args.word.strip() or 'blank'}.csv")
    dispatch = Pose.from_label(args.dispatch) if args.dispatch else None

    try:
        events = synthesize_word(args.word, load_letter_table(), dispatch=dispatch)
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    count = save_session_csv(events, out)
    print(f"💾 Saved {count} events to {out} ({events[-1].timestamp:.1f}s)")

if __name__ == "__main__":
    main()
