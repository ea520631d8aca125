from bundle_creator.cli import main

main()
