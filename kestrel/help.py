"""Help text shown on the auxiliary screen."""

HELP_TEXT = """\
NORMAL MODE                          COMMANDS
  i       insert mode                 :w [file]   save (as)
  h j k l left down up right          :wq         save and quit
  w b     next / previous word        :q  :q!     quit / force quit
  { }     previous / next paragraph   :o file     open a file
  0 $ ^   line start / end / text     :new file   new file
  g G     document start / end        :N          go to line N
  H M L   screen top / middle / end   :ln         toggle line numbers
  N%      go to N% of the document    :stats      toggle line/word count
  m       matching bracket or quote   :help       this screen
  /text   search, n N next / prev     :debug      log editor state
  x d     delete character / line
  o O     open line below / above     INSERT MODE
  A       append at end of line         Esc       back to normal mode
  J       join with next line           Tab       4 spaces
  q       close this screen"""


def help_lines():
    return HELP_TEXT.split("\n")
