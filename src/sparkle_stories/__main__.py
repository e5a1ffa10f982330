from sparkle_stories.cli import main

main()
