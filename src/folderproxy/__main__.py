from folderproxy.cli import main

main()
