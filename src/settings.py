import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

VIACEP_BASE_URL = os.getenv("VIACEP_BASE_URL", "https://viacep.com.br")
VIACEP_TIMEOUT_SECONDS = float(os.getenv("VIACEP_TIMEOUT_SECONDS", "5.0"))

# Where the file sink writes response.json when no directory is given explicitly.
OUTPUT_DIR = Path(os.getenv("CEP_OUTPUT_DIR") or PROJECT_ROOT)
