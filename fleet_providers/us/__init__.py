"""Fleet providers operating in the United States"""
