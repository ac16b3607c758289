from autoclose_tags.tag_editor import main

main()
