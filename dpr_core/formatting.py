def fmt_pct(x, digits=0):
    try:
        return f"{x * 100:.{digits}f}%"
    except Exception:
        return "-"

def fmt_ticket(ticket):
    try:
        lo, hi = ticket
        return f"INR {lo:g}L - INR {hi:g}L"
    except Exception:
        return "-"

def fmt_rate(x):
    try:
        return f"{x:.2f}% p.a."
    except Exception:
        return "-"
