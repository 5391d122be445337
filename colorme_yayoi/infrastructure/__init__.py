"""インフラストラクチャ層"""
