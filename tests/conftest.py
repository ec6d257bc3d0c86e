import os

# ents_bot.config reads settings at import time
os.environ.setdefault('BOT_TOKEN', '123456:TEST-TOKEN')
