import sys

from durable_launcher.supervisor.scripts.heartbeat_launcher import main

sys.exit(main())
