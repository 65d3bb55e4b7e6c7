"""CWIE API: internship jobs, companies and the academic directory behind them."""
