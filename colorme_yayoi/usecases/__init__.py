"""ユースケース"""
