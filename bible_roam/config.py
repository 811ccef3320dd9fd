# bible_roam/config.py
import os

DEFAULT_XML_PATH = os.getenv("BIBLE_ROAM_XML", "ESV.xml")

# 입력 XML 을 파서에 넘기는 단위 (bytes)
READ_CHUNK_SIZE = max(1, int(os.getenv("BIBLE_ROAM_CHUNK_SIZE", "65536")))
