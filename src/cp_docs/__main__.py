from cp_docs.cli import main

main()
