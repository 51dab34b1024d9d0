from dotenv import load_dotenv

load_dotenv()

from perks.application import configure_logging, create_app
from perks.core.settings import Settings


settings = Settings()
configure_logging(settings)

app = create_app(settings)
