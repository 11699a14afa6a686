from macro_planner.cli import main

main()
