# --- path safety (source checkout without `pip install -e .`) ---

import os
import sys

ROOT = os.path.dirname(os.path.abspath(__file__))
SRC = os.path.join(ROOT, "src")

if SRC not in sys.path:
    sys.path.append(SRC)

# ---------------------------------------------------------------

from pipelines.run_analysis import run_analysis
from utils.config_loader import ConfigError, DEFAULT_CONFIG_PATH


def main():

    config_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH

    try:
        result = run_analysis(config_path)
    except ConfigError as e:
        sys.exit(f"Configuration error: {e}")
    except Exception as e:
        sys.exit(f"Inventory analysis failed: {e}")

    levels = result["response"].thresholds
    print(
        f"low={levels.low:.2f} medium={levels.medium:.2f} high={levels.high:.2f} "
        f"zones={len(result['zones'])}"
    )


if __name__ == "__main__":
    main()
