import sys

from webic.assets.runner import main

sys.exit(main())
