import os
import sys
from pathlib import Path

import uvicorn

# Add /backend to sys.path so "import newsletter" works without installing
sys.path.insert(0, str(Path(__file__).resolve().parent / "backend"))

if __name__ == "__main__":
    uvicorn.run(
        "newsletter.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )
