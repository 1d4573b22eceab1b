from db_models.asset import Asset, AssetStatus, MeterUnit

__all__ = ["Asset", "AssetStatus", "MeterUnit"]
