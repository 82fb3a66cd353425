from profile_analyzer.cli import main

main()
