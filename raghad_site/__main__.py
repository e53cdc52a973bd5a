from __future__ import annotations

from raghad_site.runtime.lifecycle import main

raise SystemExit(main())
