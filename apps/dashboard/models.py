"""
Dashboard 앱은 자체 모델을 가지지 않습니다.
등록된 사이트 DB 마다 입금/출금 요약을 조회하여 뷰에서 합산합니다.
"""
