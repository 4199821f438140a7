"""Check that Supabase, MongoDB and Pinecone are reachable with the configured credentials."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from learnbyai_data.infrastructure.diagnostics import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
