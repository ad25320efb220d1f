from wsgen.cli.app import main

main()
