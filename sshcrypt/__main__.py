import sys

from sshcrypt.cli import main

sys.exit(main())
