import sys

from gitbrowse.main import main

sys.exit(main())
