from purs_scaffold.cli import main

main()
