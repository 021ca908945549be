"""
Transactions 앱은 자체 모델을 가지지 않습니다.
거래 데이터는 각 사이트 DB 의 거래 테이블에 있으며 queries.py 에서 직접 조회합니다.
"""
