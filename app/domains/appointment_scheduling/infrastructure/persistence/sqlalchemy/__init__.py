from .models import COUNTRY_MODELS, CountryModels, models_for

__all__ = ["COUNTRY_MODELS", "CountryModels", "models_for"]
