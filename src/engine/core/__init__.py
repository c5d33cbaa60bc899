"""
どこで: `engine.core` サブパッケージ。
何を: 変換行列ビルダ（transform_utils）と、メッシュ/部品/直方体のシーンモデル（model）。
なぜ: 描画から独立した計算層として、モデル変換をテスト可能な純粋処理に保つため。
"""
