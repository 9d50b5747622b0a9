"""
main.py — Bootstrap

1. Load tuning overrides
2. Create the app
3. Push the world scene (generates the world)
4. Run

    python main.py            # fresh random world
    python main.py 1234       # reproducible world from seed 1234
"""

import sys
from core.app import App
from core import tuning
from scenes.world_scene import WorldScene


def main():
    tuning.load()
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None

    app = App(title="Wildgrid", width=960, height=640)
    app.push_scene(WorldScene(seed=seed))
    app.run()


if __name__ == "__main__":
    main()
