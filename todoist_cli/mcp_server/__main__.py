from todoist_cli.mcp_server import main

main()
