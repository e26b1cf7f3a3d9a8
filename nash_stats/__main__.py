from nash_stats.cli.main import main

main()
