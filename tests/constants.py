from pathlib import Path

TEST_DIR = Path(__file__).parent.resolve()
