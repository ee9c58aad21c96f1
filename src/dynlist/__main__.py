from dynlist.cli import main

main()
