import sys

from notion_tree.cli import main


sys.exit(main())
