"""비즈니스 서비스 모듈"""
