"""
どこで: リポジトリ直下 `main.py`。
何を: 三角形 + 5 つの多角形を巡回させ、run でプレビュー表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging
import sys

sys.path.append("src")

from polychime import run

SYNC = False
N = 5
SPEED = 1.0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(sync=SYNC, n=N, speed=SPEED)
