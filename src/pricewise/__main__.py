from pricewise.cli.main import main

main()
