from phpconcepts.cli import main

main()
