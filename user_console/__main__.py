import sys

from user_console.main import main

sys.exit(main())
