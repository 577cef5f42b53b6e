"""Allow ``python -m notesbridge``."""

from notesbridge.cli import main

raise SystemExit(main())
