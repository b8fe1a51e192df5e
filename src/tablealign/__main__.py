"""Allow running as ``python -m tablealign``"""

from tablealign.application import main

main()
