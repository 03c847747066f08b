from wordsprint.main import main
import sys

sys.exit(main())
