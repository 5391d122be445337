"""値オブジェクト"""
from colorme_yayoi.domain.value_objects.application_config import ApplicationConfig
from colorme_yayoi.domain.value_objects.catalog import ProductCatalog, SetComponent
from colorme_yayoi.domain.value_objects.conversion_settings import ConversionSettings
from colorme_yayoi.domain.value_objects.match_result import MatchResult

__all__ = [
    "ApplicationConfig",
    "ProductCatalog",
    "SetComponent",
    "ConversionSettings",
    "MatchResult",
]
