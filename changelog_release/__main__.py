from changelog_release.cli import main

main()
