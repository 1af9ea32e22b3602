"""
Раскладка и растеризация карточки
"""
