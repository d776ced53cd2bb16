import sys

from huawei_importer.main import main

sys.exit(main())
