"""
どこで: `common` パッケージ。
何を: 環境変数ヘルパ・型付き設定・既定ロギングなど、各層で共有する軽量基盤。
なぜ: 設定とロギングの入口を一か所に集め、依存の向きを単純化するため。
"""
