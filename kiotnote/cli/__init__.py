"""Unified command-line interface for kiotnote.

Usage:
    kiotnote parse "2 cà phê 30k, 1 bánh mì"
    kiotnote parse "nhập 50 hoa hồng giá 5k" --restock
    kiotnote order "2 cà phê 30k"
    kiotnote restock "Nhập 50 hoa hồng giá 5k phí ship 30k"
    kiotnote expense "Tiền điện" 500k
    kiotnote report [--range today|week|month|quarter|custom] [--csv [DIR]]
"""
