"""
どこで: `engine.render` サブパッケージ。
何を: RGBA キャンバス・カメラ投影・線分ラスタライズによるワイヤーフレーム描画。
なぜ: 計算（core）と描画の責務を分離し、ウィンドウ無しでフレームを生成できるようにするため。
"""
