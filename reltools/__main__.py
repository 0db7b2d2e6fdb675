from reltools.cli.app import main

main()
