from project_hub.cli import main

main()
