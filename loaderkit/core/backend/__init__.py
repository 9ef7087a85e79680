# -*- coding: utf-8 -*-
"""
后端基础服务：配置、资源加载
"""
